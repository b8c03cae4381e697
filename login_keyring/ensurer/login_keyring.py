# login_keyring/ensurer/login_keyring.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import structlog

from login_keyring.config.loader import ConfigLoader
from login_keyring.secrets.base_backend import SecretServiceBackend
from login_keyring.secrets.errors import (
    CreateFailed,
    KeyringError,
    LookupFailed,
    ServiceError,
    SetDefaultFailed,
)
from login_keyring.secrets.factory import build_backend

KEYRING_LOGIN = "login"

logger = structlog.get_logger(__name__)


class EnsureState(Enum):
    CHECK_DEFAULT = "check_default"
    CHECK_EXISTS = "check_exists"
    CREATE_AND_SET = "create_and_set"
    SATISFIED = "satisfied"
    FAILED = "failed"


@dataclass
class EnsureResult:
    state: EnsureState
    created: bool = False
    dry_run: bool = False
    error: Optional[KeyringError] = None
    lookup_errors: List[LookupFailed] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is not EnsureState.FAILED

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else -1


class LoginKeyringEnsurer:
    """
    Makes sure a keyring named "login" exists and is the default.

    Failed lookups are logged and treated as "not found" so a freshly started
    service without a default still gets its login keyring. Failed mutations
    stop the run and are returned in the result.
    """

    def __init__(self, backend: SecretServiceBackend, dry_run: bool = False):
        self.backend = backend
        self.dry_run = dry_run

    def ensure(self) -> EnsureResult:
        result = EnsureResult(state=EnsureState.CHECK_DEFAULT, dry_run=self.dry_run)

        if self._is_default_name(KEYRING_LOGIN, result):
            result.state = EnsureState.SATISFIED
            return result

        result.state = EnsureState.CHECK_EXISTS
        if self._is_name_exist(KEYRING_LOGIN, result):
            result.state = EnsureState.SATISFIED
            return result

        result.state = EnsureState.CREATE_AND_SET
        if self.dry_run:
            logger.info("Dry run: would create and set default keyring", name=KEYRING_LOGIN)
            return result

        try:
            self.backend.create_keyring(KEYRING_LOGIN, "")
        except ServiceError as e:
            logger.warning("Failed to create keyring", name=KEYRING_LOGIN, code=e.code)
            return self._fail(result, CreateFailed.from_service_error(e))
        logger.info("Created keyring", name=KEYRING_LOGIN)
        result.created = True

        try:
            self.backend.set_default_keyring(KEYRING_LOGIN)
        except ServiceError as e:
            logger.warning("Failed to set default keyring", name=KEYRING_LOGIN, code=e.code)
            return self._fail(result, SetDefaultFailed.from_service_error(e))
        logger.info("Set default keyring", name=KEYRING_LOGIN)

        result.state = EnsureState.SATISFIED
        return result

    def _is_default_name(self, name: str, result: EnsureResult) -> bool:
        try:
            current = self.backend.get_default_keyring_name()
        except ServiceError as e:
            logger.warning("Failed to get default keyring", code=e.code)
            result.lookup_errors.append(LookupFailed.from_service_error(e))
            return False
        if not current:
            return False
        logger.debug("Default keyring", name=current)
        return current == name

    def _is_name_exist(self, name: str, result: EnsureResult) -> bool:
        try:
            names = self.backend.list_keyring_names()
        except ServiceError as e:
            logger.warning("Failed to list keyring names", code=e.code)
            result.lookup_errors.append(LookupFailed.from_service_error(e))
            return False
        for keyring_name in names:
            logger.debug("Keyring name", name=keyring_name)
            if keyring_name == name:
                return True
        return False

    @staticmethod
    def _fail(result: EnsureResult, error: KeyringError) -> EnsureResult:
        result.state = EnsureState.FAILED
        result.error = error
        return result


def ensure_login_keyring(backend: Optional[SecretServiceBackend] = None, dry_run: bool = False) -> int:
    """
    Returns 0 when the login keyring exists (or was created), -1 otherwise.
    Without a backend, one is built from the loaded configuration and closed afterwards.
    """
    if backend is not None:
        return LoginKeyringEnsurer(backend, dry_run=dry_run).ensure().exit_code

    try:
        config = ConfigLoader().load()
        owned = build_backend(config)
    except ValueError as e:
        logger.error("Invalid configuration", error=str(e))
        return -1
    with owned:
        return LoginKeyringEnsurer(owned, dry_run=dry_run or config["dry_run"]).ensure().exit_code
