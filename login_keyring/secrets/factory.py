# login_keyring/secrets/factory.py
from typing import Any, Dict

from login_keyring.config.loader import BACKENDS

from .base_backend import SecretServiceBackend
from .memory_backend import InMemoryBackend
from .secretstorage_backend import SecretStorageBackend


def build_backend(config: Dict[str, Any]) -> SecretServiceBackend:
    backend = config.get("backend", "secretstorage")
    if backend == "memory":
        return InMemoryBackend()
    if backend == "secretstorage":
        return SecretStorageBackend(connect_attempts=config.get("connect_attempts", 3))
    raise ValueError(f"Unknown backend '{backend}'. Expected one of: {', '.join(BACKENDS)}.")
