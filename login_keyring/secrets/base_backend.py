# login_keyring/secrets/base_backend.py
from abc import ABC, abstractmethod
from typing import List, Optional


class SecretServiceBackend(ABC):
    """
    Client interface to a keyring daemon.
    Every operation raises ServiceError when the service fails to answer.
    """

    @abstractmethod
    def get_default_keyring_name(self) -> Optional[str]:
        pass

    @abstractmethod
    def list_keyring_names(self) -> List[str]:
        pass

    @abstractmethod
    def create_keyring(self, name: str, password: str) -> None:
        pass

    @abstractmethod
    def set_default_keyring(self, name: str) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
