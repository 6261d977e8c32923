# -*- coding: utf-8 -*-

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import keyring
import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError
from pymysql.converters import escape_string

from dbconnector.connector import Connector, logger
from dbconnector.config import main as config_main
from dbconnector.driver import Driver, DriverResult, NO_ERROR


logger.setLevel(logging.DEBUG)


class FakeResponse:
    """Canned response of :class:`FakeDriver` for one statement."""

    def __init__(
        self,
        columns: Sequence[str] = (),
        rows: Sequence[Tuple[Any, ...]] = (),
        affected: int = 0,
        error: Tuple[int, str] = NO_ERROR,
        fetch_error: Tuple[int, str] = NO_ERROR,
    ) -> None:
        self.columns = tuple(columns)
        self.rows = list(rows)
        self.affected = affected
        self.error = error
        self.fetch_error = fetch_error


class FakeResult(DriverResult):
    def __init__(self, driver: "FakeDriver", response: FakeResponse) -> None:
        self._driver = driver
        self._response = response
        self._rows = list(response.rows)
        self.fetched = 0
        self.closed = False

    @property
    def column_names(self) -> Sequence[str]:
        return self._response.columns

    def fetch_row(self) -> Optional[Tuple[Any, ...]]:
        self._driver.error = NO_ERROR

        if self.closed:
            return None

        if not self._rows:
            self._driver.error = self._response.fetch_error
            return None

        self.fetched += 1
        return self._rows.pop(0)

    def close(self) -> None:
        self.closed = True


class FakeDriver(Driver):
    """In-memory driver which records statements and replies with canned responses.

    Escaping follows MySQL's backslash escaping rules.
    """

    def __init__(self) -> None:
        self.responses: Dict[str, FakeResponse] = {
            "select last_insert_id()": FakeResponse(
                columns=("last_insert_id()",), rows=[(42,)]
            )
        }
        self.connect_error = NO_ERROR
        self.select_error = NO_ERROR
        self.error = NO_ERROR

        self.connected_with: Optional[Tuple[str, str, str, int, str]] = None
        self.database: Optional[str] = None
        self.charset: Optional[str] = None
        self.executed: List[str] = []
        self.streamed: List[bool] = []
        self.results: List[FakeResult] = []
        self.closed = False
        self._affected = 0

    def respond(self, sql: str, **kwargs: Any) -> FakeResponse:
        response = FakeResponse(**kwargs)
        self.responses[sql] = response
        return response

    def connect(
        self, host: str, user: str, password: str, port: int, charset: str
    ) -> bool:
        self.error = self.connect_error
        if self.error != NO_ERROR:
            return False
        self.connected_with = (host, user, password, port, charset)
        return True

    def select_database(self, name: str) -> None:
        self.error = self.select_error
        if self.error == NO_ERROR:
            self.database = name

    def set_charset(self, charset: str) -> None:
        self.error = NO_ERROR
        self.charset = charset

    def escape(self, value: str) -> str:
        return escape_string(value)

    def execute(self, sql: str, stream: bool = False) -> Optional[FakeResult]:
        self.executed.append(sql)
        self.streamed.append(stream)

        response = self.responses.get(sql, FakeResponse())
        self.error = response.error

        if self.error != NO_ERROR:
            return None

        self._affected = -1 if stream else response.affected
        result = FakeResult(self, response)
        self.results.append(result)
        return result

    def affected_rows(self) -> int:
        return self._affected

    def last_error(self) -> Tuple[int, str]:
        return self.error

    def close(self) -> None:
        self.closed = True


class InMemoryKeyring(KeyringBackend):
    """Keyring backend which keeps passwords in a dictionary."""

    priority = 1  # type: ignore

    def __init__(self) -> None:
        super().__init__()
        self.passwords: Dict[Tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> Optional[str]:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found")


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keeps config and log files of each test in a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setattr(config_main, "_config_instances", {})
    yield tmp_path


@pytest.fixture
def memory_keyring():
    old_keyring = keyring.get_keyring()
    backend = InMemoryKeyring()
    keyring.set_keyring(backend)

    yield backend

    keyring.set_keyring(old_keyring)


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def db(driver):
    connector = Connector("testdb", "user", "secret", driver=driver)
    yield connector
    connector.close()
