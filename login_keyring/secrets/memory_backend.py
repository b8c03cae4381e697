# login_keyring/secrets/memory_backend.py
from typing import Dict, Iterable, List, Optional

from .base_backend import SecretServiceBackend
from .errors import ServiceError


class InMemoryBackend(SecretServiceBackend):
    """In-process stand-in for the Secret Service. Nothing is persisted."""

    def __init__(self, names: Optional[Iterable[str]] = None, default: Optional[str] = None):
        self.names: List[str] = list(names or [])
        self.default = default
        self.passwords: Dict[str, str] = {}

    def get_default_keyring_name(self) -> Optional[str]:
        return self.default

    def list_keyring_names(self) -> List[str]:
        return list(self.names)

    def create_keyring(self, name: str, password: str) -> None:
        if name in self.names:
            raise ServiceError("AlreadyExists", f"Keyring '{name}' already exists.")
        self.names.append(name)
        self.passwords[name] = password

    def set_default_keyring(self, name: str) -> None:
        if name not in self.names:
            raise ServiceError("NoSuchKeyring", f"Keyring '{name}' does not exist.")
        self.default = name
