# login_keyring/secrets/secretstorage_backend.py
from typing import List, Optional

import secretstorage
import structlog
from jeepney.wrappers import DBusErrorResponse
from secretstorage.defines import SS_PATH, SS_PREFIX
from secretstorage.exceptions import SecretServiceNotAvailableException, SecretStorageException
from secretstorage.util import DBusAddressWrapper, format_secret, open_session
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base_backend import SecretServiceBackend
from .errors import ServiceError

SERVICE_IFACE = SS_PREFIX + "Service"
# gnome-keyring only: the standard CreateCollection call always prompts for a password.
GNOME_KEYRING_IFACE = "org.gnome.keyring.InternalUnsupportedGuiltRiddenInterface"
DEFAULT_ALIAS = "default"
NO_OBJECT_PATH = "/"

logger = structlog.get_logger(__name__)


def keyring_name_from_path(collection_path: str) -> str:
    """
    Returns the last segment of a collection path. gnome-keyring escapes labels
    when it builds paths ("My Keyring" becomes "My_20Keyring"), so for spaced or
    non-ASCII labels this is the escaped form, not the label.
    """
    return collection_path.rstrip("/").rsplit("/", 1)[-1]


class SecretStorageBackend(SecretServiceBackend):
    """
    Talks to org.freedesktop.secrets on the session bus.
    Keyring names are the last segment of the collection object paths.
    """

    def __init__(self, connect_attempts: int = 3, connect_wait: float = 1.0):
        self.connect_attempts = max(1, connect_attempts)
        self.connect_wait = connect_wait
        self._connection = None

    @property
    def connection(self):
        if self._connection is None:
            self._connection = self._connect()
        return self._connection

    def _connect(self):
        @retry(
            stop=stop_after_attempt(self.connect_attempts),
            wait=wait_exponential(multiplier=self.connect_wait, min=self.connect_wait, max=10),
            retry=retry_if_exception_type(SecretServiceNotAvailableException),
            reraise=True,
        )
        def connect_attempt():
            connection = secretstorage.dbus_init()
            logger.debug("Connected to secret service")
            return connection

        try:
            return connect_attempt()
        except SecretStorageException as e:
            raise ServiceError(type(e).__name__, str(e)) from e

    def _service(self, interface: str = SERVICE_IFACE) -> DBusAddressWrapper:
        return DBusAddressWrapper(SS_PATH, interface, self.connection)

    def _collection_paths(self) -> List[str]:
        return list(self._service().get_property("Collections"))

    def get_default_keyring_name(self) -> Optional[str]:
        try:
            (path,) = self._service().call("ReadAlias", "s", DEFAULT_ALIAS)
        except (SecretStorageException, DBusErrorResponse) as e:
            raise _service_error(e) from e
        if not path or path == NO_OBJECT_PATH:
            return None
        return keyring_name_from_path(path)

    def list_keyring_names(self) -> List[str]:
        try:
            paths = self._collection_paths()
        except (SecretStorageException, DBusErrorResponse) as e:
            raise _service_error(e) from e
        return [keyring_name_from_path(path) for path in paths]

    def create_keyring(self, name: str, password: str) -> None:
        properties = {SS_PREFIX + "Collection.Label": ("s", name)}
        try:
            session = open_session(self.connection)
            secret = format_secret(session, password.encode("utf-8"), "text/plain")
            (path,) = self._service(GNOME_KEYRING_IFACE).call(
                "CreateWithMasterPassword", "a{sv}(oayays)", properties, secret
            )
        except (SecretStorageException, DBusErrorResponse) as e:
            raise _service_error(e) from e
        logger.debug("Collection created", name=name, path=path)

    def set_default_keyring(self, name: str) -> None:
        try:
            paths = self._collection_paths()
            path = next((p for p in paths if keyring_name_from_path(p) == name), None)
            if path is None:
                raise ServiceError("NoSuchKeyring", f"Keyring '{name}' does not exist.")
            self._service().call("SetAlias", "so", DEFAULT_ALIAS, path)
        except (SecretStorageException, DBusErrorResponse) as e:
            raise _service_error(e) from e

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None


def _service_error(error: Exception) -> ServiceError:
    if isinstance(error, DBusErrorResponse):
        return ServiceError(error.name, " ".join(str(part) for part in error.data))
    return ServiceError(type(error).__name__, str(error))
