# login_keyring/config/loader.py

import os
import yaml
from dotenv import load_dotenv
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULTS = {
    "backend": "secretstorage",
    "log_format": "plain",
    "connect_attempts": 3,
    "dry_run": False,
}
ENV_OVERRIDES = {
    "backend": "LOGIN_KEYRING_BACKEND",
    "log_format": "LOGIN_KEYRING_LOG_FORMAT",
    "connect_attempts": "LOGIN_KEYRING_CONNECT_ATTEMPTS",
    "dry_run": "LOGIN_KEYRING_DRY_RUN",
}
LOG_FORMATS = ("plain", "json")
BACKENDS = ("secretstorage", "memory")


class ConfigLoader:
    def __init__(self, config_path: str = "login_keyring.yaml"):
        self.config_path = Path(config_path)
        load_dotenv()  # Load .env if present

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        config = dict(DEFAULTS)
        if self.config_path.exists():
            with self.config_path.open('r') as f:
                config.update(yaml.safe_load(f) or {})
        # Override with env vars and validate
        for key, env_var in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is not None:
                config[key] = value
        # Explicit overrides (CLI options) win over everything; None means "not given"
        config.update({key: value for key, value in (overrides or {}).items() if value is not None})
        return self._validate(config)

    def _validate(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if config["backend"] not in BACKENDS:
            raise ValueError(f"Invalid backend '{config['backend']}'. Expected one of: {', '.join(BACKENDS)}.")
        if config["log_format"] not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format '{config['log_format']}'. Expected one of: {', '.join(LOG_FORMATS)}.")
        try:
            attempts = int(config["connect_attempts"])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid connect_attempts '{config['connect_attempts']}'. Expected an integer.") from None
        if attempts < 1:
            raise ValueError("connect_attempts must be at least 1.")
        config["connect_attempts"] = attempts
        config["dry_run"] = _as_bool(config["dry_run"])
        return config


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid dry_run '{value}'. Expected a boolean.")
