# login_keyring/main.py

from typing import Any, Dict, Optional

import keyring
import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from login_keyring.config.loader import ConfigLoader
from login_keyring.ensurer.login_keyring import KEYRING_LOGIN, EnsureState, LoginKeyringEnsurer
from login_keyring.logging.logger import setup_logging
from login_keyring.secrets.errors import ServiceError
from login_keyring.secrets.factory import build_backend

app = typer.Typer()
console = Console()
logger = structlog.get_logger(__name__)


def _load_config(config_path: str, **overrides: Any) -> Dict[str, Any]:
    try:
        return ConfigLoader(config_path=config_path).load(overrides)
    except ValueError as e:
        console.print(f"[bold red]Configuration error: {e}[/bold red]")
        raise typer.Exit(code=2)


@app.command()
def ensure(
    backend: Optional[str] = typer.Option(None, help="Secret service backend: secretstorage or memory"),
    dry_run: bool = typer.Option(False, help="Check only; do not create the keyring or change the default"),
    config: str = typer.Option("login_keyring.yaml", help="Path to configuration YAML file"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
    log_format: Optional[str] = typer.Option(None, help="Log format: plain or json"),
):
    """Make sure the login keyring exists and is the default."""
    settings = _load_config(config, backend=backend, log_format=log_format)
    setup_logging(verbose=verbose, log_format=settings["log_format"])
    try:
        service = build_backend(settings)
    except ValueError as e:
        console.print(f"[bold red]Configuration error: {e}[/bold red]")
        raise typer.Exit(code=2)

    with service:
        result = LoginKeyringEnsurer(service, dry_run=dry_run or settings["dry_run"]).ensure()

    for lookup_error in result.lookup_errors:
        console.print(f"[yellow]Lookup failed ({lookup_error.code}); assumed keyring is missing.[/yellow]")

    if result.state is EnsureState.FAILED:
        console.print(Panel(f"Could not provision keyring '{KEYRING_LOGIN}': {result.error}", title="[bold red]Failed[/bold red]", border_style="red"))
        raise typer.Exit(code=1)
    if result.dry_run and result.state is EnsureState.CREATE_AND_SET:
        message = f"Dry run: keyring '{KEYRING_LOGIN}' would be created and set as default."
    elif result.created:
        message = f"Keyring '{KEYRING_LOGIN}' created and set as default."
    else:
        message = f"Keyring '{KEYRING_LOGIN}' already present."
    console.print(Panel(message, title="[bold green]Success[/bold green]", border_style="green"))


@app.command()
def status(
    backend: Optional[str] = typer.Option(None, help="Secret service backend: secretstorage or memory"),
    config: str = typer.Option("login_keyring.yaml", help="Path to configuration YAML file"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Show the keyrings known to the secret service and which one is the default."""
    settings = _load_config(config, backend=backend)
    setup_logging(verbose=verbose, log_format=settings["log_format"])
    try:
        service = build_backend(settings)
    except ValueError as e:
        console.print(f"[bold red]Configuration error: {e}[/bold red]")
        raise typer.Exit(code=2)

    with service:
        try:
            default = service.get_default_keyring_name()
        except ServiceError as e:
            logger.warning("Failed to get default keyring", code=e.code)
            console.print(f"[yellow]Could not read default keyring: {e.code}[/yellow]")
            default = None
        try:
            names = service.list_keyring_names()
        except ServiceError as e:
            logger.warning("Failed to list keyring names", code=e.code)
            console.print(f"[yellow]Could not list keyrings: {e.code}[/yellow]")
            names = []

    table = Table(title="Keyrings")
    table.add_column("Name", style="bold")
    table.add_column("Default")
    for name in names:
        table.add_row(name, "yes" if name == default else "")
    console.print(table)

    credential_backend = keyring.get_keyring()
    console.print(f"Credential store: {getattr(credential_backend, 'name', type(credential_backend).__name__)}")


if __name__ == "__main__":
    app()
