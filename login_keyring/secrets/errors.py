# login_keyring/secrets/errors.py
from typing import Optional


class ServiceError(Exception):
    """Raised by a secret-service backend when the service rejects or cannot serve a request."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message


class KeyringError(Exception):
    """Base class for failures reported by the login keyring check."""

    def __init__(self, code: str, cause: Optional[Exception] = None):
        super().__init__(f"{self.__class__.__name__} ({code})")
        self.code = code
        self.cause = cause

    @classmethod
    def from_service_error(cls, error: ServiceError) -> "KeyringError":
        return cls(error.code, cause=error)


class LookupFailed(KeyringError):
    pass


class CreateFailed(KeyringError):
    pass


class SetDefaultFailed(KeyringError):
    pass
