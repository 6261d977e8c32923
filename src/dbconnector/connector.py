"""
This module defines the :class:`Connector`, a facade which owns one database connection
and provides the primitives to quote values and execute statements.
"""

from __future__ import annotations

import logging
from typing import Any, List

from .driver import Driver, DriverResult, PyMySQLDriver
from .errors import (
    DbConnectionError,
    DatabaseSelectError,
    QueryError,
    format_driver_error,
)
from .placeholders import (
    count_placeholders,
    normalize_arguments,
    substitute_placeholders,
)
from .rows import Row, RowSource


__all__ = [
    "Connector",
    "connect",
    "connect_from_config",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_CHARSET",
]

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_CHARSET = "utf8"


class Connector:
    """Owns a single database connection

    The connection is opened on construction and stays open until :meth:`close` is
    called. All methods block until the server responds. A connector must not be shared
    between threads without external synchronization.

    Statements may contain ``?`` placeholders which are replaced by quoted arguments
    before the statement is sent to the server. Arguments are either a single scalar or
    a list or tuple of scalars::

        db = Connector("mydb", "user", "secret")
        count = db.exec("delete from mytable where section = ?", "a-section")
        rows = db.fetch_rows("select * from mytable where a = ? and b = ?", [1, 2])

    A :class:`RowSource` returned by :meth:`query` must be consumed completely or
    closed before the next statement is executed on the same connector.

    :param database: Name of the database to select.
    :param username: User name.
    :param password: Password.
    :param host: Server host.
    :param charset: Character set of the session.
    :param port: Server port.
    :param driver: Driver to use. Defaults to a new :class:`PyMySQLDriver`.
    :raises DbConnectionError: if connecting to the server fails.
    :raises DatabaseSelectError: if the database cannot be selected.
    """

    def __init__(
        self,
        database: str,
        username: str = "",
        password: str = "",
        host: str = DEFAULT_HOST,
        charset: str = DEFAULT_CHARSET,
        port: int = DEFAULT_PORT,
        driver: Driver | None = None,
    ) -> None:
        self.database = database
        self.host = host
        self.charset = charset
        self._driver = driver if driver is not None else PyMySQLDriver()
        self._closed = True

        logger.debug("Connecting to %s@%s:%s", username, host, port)

        if not self._driver.connect(host, username, password, port, charset):
            errno, error = self._driver.last_error()
            exc = DbConnectionError(
                "Failed to connect to the database", format_driver_error(errno, error)
            )
            logger.debug(str(exc))
            raise exc

        self._closed = False

        self._driver.select_database(database)
        errno, error = self._driver.last_error()
        if errno > 0:
            self._driver.close()
            self._closed = True
            exc = DatabaseSelectError(
                f"Failed to select database '{database}'",
                format_driver_error(errno, error),
            )
            logger.debug(str(exc))
            raise exc

        self._driver.set_charset(charset)

        logger.info("Connected to database '%s' on %s", database, host)

    # ---- state -----------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        """Whether the connection has been closed."""
        return self._closed

    @property
    def driver(self) -> Driver:
        """The driver which owns the underlying connection."""
        return self._driver

    def _check_open(self) -> None:
        if self._closed:
            raise DbConnectionError(
                "Connection closed", f"Cannot use database '{self.database}'"
            )

    def _check_driver_error(self, title: str) -> None:
        errno, error = self._driver.last_error()
        if errno > 0:
            exc = QueryError(title, f"({errno}) {error}")
            logger.debug(str(exc))
            raise exc

    # ---- quoting ---------------------------------------------------------------------

    def quote(self, value: Any) -> str:
        """
        Escapes and quotes a value.

        ``None`` becomes ``null`` and bytes become a ``_binary'...'`` literal. All other
        values are converted to text, escaped with the rules of the current connection
        and wrapped in single quotes::

            rows = db.fetch_rows("select * from mytable where id = " + db.quote(id))

        It is usually preferable to use placeholders instead::

            rows = db.fetch_rows("select * from mytable where id = ?", id)

        :param value: Value to quote.
        :returns: SQL literal.
        """
        self._check_open()

        if value is None:
            return "null"

        if isinstance(value, (bytes, bytearray)):
            # bytes >= 0x80 survive as surrogates until the statement is encoded
            text = bytes(value).decode("ascii", "surrogateescape")
            return "_binary'" + self._driver.escape(text) + "'"

        if isinstance(value, bool):
            text = "1" if value else "0"
        else:
            text = str(value)

        return "'" + self._driver.escape(text) + "'"

    def substitute_placeholders(self, sql: str, arguments: Any = ()) -> str:
        """
        Replaces ``?`` placeholders with quoted arguments. Placeholders without a
        matching argument are left unchanged and surplus arguments are ignored.

        :param sql: SQL statement.
        :param arguments: A single scalar or a list or tuple of scalars.
        :returns: SQL statement with placeholders replaced.
        """
        args = normalize_arguments(arguments)
        placeholders = count_placeholders(sql)

        if placeholders > len(args):
            logger.debug(
                "Statement has %s placeholders but only %s arguments",
                placeholders,
                len(args),
            )

        return substitute_placeholders(sql, args, self.quote)

    # ---- statements ------------------------------------------------------------------

    def _execute(
        self, sql: str, arguments: Any = (), stream: bool = False
    ) -> DriverResult:
        self._check_open()

        sql = self.substitute_placeholders(sql, arguments)
        logger.debug("Executing: %s", sql)

        result = self._driver.execute(sql, stream=stream)
        self._check_driver_error("Failed to execute the statement")

        if result is None:
            raise QueryError("Failed to execute the statement", "No result")

        return result

    def exec(self, sql: str, arguments: Any = ()) -> int:
        """
        Executes an SQL statement and returns the number of affected rows::

            count = db.exec("delete from mytable where section = 'mysection'")

        :param sql: SQL statement with ``?`` placeholders.
        :param arguments: A single scalar or a list or tuple of scalars.
        :returns: Number of rows affected by the statement.
        :raises QueryError: if the driver reports an error.
        """
        result = self._execute(sql, arguments)
        result.close()
        return self._driver.affected_rows()

    def query(self, sql: str, arguments: Any = ()) -> RowSource:
        """
        Executes a statement which returns rows (select, show, describe, etc.) and
        returns a lazy row source::

            # retrieves a single value
            count = db.query("select count(*) from mytable")[0][0]

            # retrieves multiple rows
            for row in db.query("select id, name from mytable where section = ?", "s"):
                print(row["id"], row["name"])

        :param sql: SQL statement with ``?`` placeholders.
        :param arguments: A single scalar or a list or tuple of scalars.
        :returns: Rows of the result.
        :raises QueryError: if the driver reports an error.
        """
        return RowSource(self, sql, arguments)

    def fetch_rows(self, sql: str, arguments: Any = ()) -> List[Row]:
        """
        Executes a statement which returns rows and returns all rows at once. The result
        is released before returning.

        :param sql: SQL statement with ``?`` placeholders.
        :param arguments: A single scalar or a list or tuple of scalars.
        :returns: All rows of the result, an empty list if there are none.
        :raises QueryError: if the driver reports an error.
        """
        with RowSource(self, sql, arguments) as rows:
            return list(rows)

    def get_last_insert_id(self) -> str:
        """
        Returns the id generated for an AUTO_INCREMENT column by the most recent insert
        on this connection.

        :returns: Last insert id as text.
        """
        with RowSource(self, "select last_insert_id()") as rows:
            return str(rows[0][0])

    def close(self) -> None:
        """Closes the connection. Further calls have no effect."""
        if self._closed:
            return

        self._driver.close()
        self._closed = True
        logger.info("Closed connection to database '%s'", self.database)

    def __enter__(self) -> Connector:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return (
            f"<{self.__class__.__name__}(database='{self.database}', "
            f"host='{self.host}', {state})>"
        )


def connect(
    database: str,
    username: str = "",
    password: str = "",
    host: str = DEFAULT_HOST,
    charset: str = DEFAULT_CHARSET,
    port: int = DEFAULT_PORT,
    driver: Driver | None = None,
) -> Connector:
    """
    Opens a connection. See :class:`Connector` for the parameters.

    :returns: Connector for the given database.
    """
    return Connector(database, username, password, host, charset, port, driver)


def connect_from_config(
    config_name: str, password: str | None = None, driver: Driver | None = None
) -> Connector:
    """
    Opens a connection with the settings of a saved configuration. If no password is
    given, the password saved in the system keyring for the configuration is used.

    :param config_name: Name of the configuration.
    :param password: Password, overrides any saved password.
    :param driver: Driver to use.
    :returns: Connector for the configured database.
    :raises CredentialError: if reading the saved password fails.
    """
    from .config import DbConnectorConfig
    from .keyring import CredentialStorage

    conf = DbConnectorConfig(config_name)

    if password is None:
        password = CredentialStorage(config_name).password or ""

    return Connector(
        database=conf.get("connection", "database"),
        username=conf.get("connection", "username"),
        password=password,
        host=conf.get("connection", "host"),
        charset=conf.get("connection", "charset"),
        port=conf.get("connection", "port"),
        driver=driver,
    )
