"""
This module is responsible for storing database passwords in the system keyring.
"""

from __future__ import annotations

import logging
from threading import RLock

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from .config import DbConnectorConfig
from .errors import CredentialError


__all__ = ["CredentialStorage", "KEYRING_SERVICE"]

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "dbconnector"


class CredentialStorage:
    """Provides a threadsafe interface to store a database password in a system keyring

    Passwords are saved under the service name "dbconnector" with the account name
    "<username>@<host>" taken from the configuration. Configurations which connect with
    the same user to the same host therefore share a password.

    .. warning:: Depending on the keyring backend, other applications in the same user
        session may be able to read all saved passwords once the keyring is unlocked.

    :param config_name: Name of the configuration.
    """

    _lock = RLock()

    def __init__(self, config_name: str) -> None:
        self._config_name = config_name
        self._conf = DbConnectorConfig(config_name)

        # defer keyring access until the password is requested
        self._password: str | None = None
        self._loaded = False

    @property
    def account(self) -> str:
        """The account name under which the password is stored."""
        username = self._conf.get("connection", "username")
        host = self._conf.get("connection", "host")
        return f"{username}@{host}"

    @property
    def password(self) -> str | None:
        """The saved password or ``None`` if no password is saved. (read only)"""
        with self._lock:
            if not self._loaded:
                self.load_password()
            return self._password

    def load_password(self) -> None:
        """
        Loads the password from the system keyring.

        :raises CredentialError: if the keyring cannot be accessed.
        """
        with self._lock:
            logger.debug("Reading password for %s from keyring", self.account)

            try:
                self._password = keyring.get_password(KEYRING_SERVICE, self.account)
            except KeyringError as exc:
                raise CredentialError(
                    "Could not load password", f"Cannot access keyring: {exc}"
                ) from exc

            self._loaded = True

    def save_password(self, password: str) -> None:
        """
        Saves a password in the system keyring.

        :param password: Password to save.
        :raises CredentialError: if the keyring cannot be accessed.
        """
        with self._lock:
            try:
                keyring.set_password(KEYRING_SERVICE, self.account, password)
            except KeyringError as exc:
                raise CredentialError(
                    "Could not save password", f"Cannot access keyring: {exc}"
                ) from exc

            self._password = password
            self._loaded = True

            logger.debug("Saved password for %s in keyring", self.account)

    def delete_password(self) -> None:
        """
        Deletes the saved password from the system keyring. Does nothing if no password
        is saved.

        :raises CredentialError: if the keyring cannot be accessed.
        """
        with self._lock:
            try:
                keyring.delete_password(KEYRING_SERVICE, self.account)
            except PasswordDeleteError:
                # password does not exist
                pass
            except KeyringError as exc:
                raise CredentialError(
                    "Could not delete password", f"Cannot access keyring: {exc}"
                ) from exc

            self._password = None
            self._loaded = True

            logger.debug("Deleted password for %s from keyring", self.account)
