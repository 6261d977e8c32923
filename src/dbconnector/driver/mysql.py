"""
MySQL driver built on PyMySQL.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pymysql
import pymysql.cursors
from pymysql.constants import SERVER_STATUS
from pymysql.converters import escape_string

from .base import Driver, DriverResult, NO_ERROR


__all__ = ["PyMySQLDriver", "PyMySQLResult", "CR_UNKNOWN_ERROR"]

logger = logging.getLogger(__name__)

# MySQL client error code used when an exception does not carry its own code
CR_UNKNOWN_ERROR = 2000


def error_from_exception(exc: Exception) -> tuple[int, str]:
    """
    Extracts error code and message from a PyMySQL exception.

    :param exc: Exception raised by PyMySQL.
    :returns: Tuple of error code and message.
    """
    args = exc.args

    if len(args) >= 2 and isinstance(args[0], int):
        errno, error = args[0], str(args[1])
    else:
        errno, error = 0, str(exc)

    if errno <= 0:
        errno = CR_UNKNOWN_ERROR

    if not error:
        error = exc.__class__.__name__

    return errno, error


class PyMySQLResult(DriverResult):
    """Result set backed by a PyMySQL cursor

    :param cursor: Cursor on which the statement was executed.
    :param driver: Driver which records errors raised while fetching rows.
    """

    def __init__(self, cursor: pymysql.cursors.Cursor, driver: PyMySQLDriver) -> None:
        self._cursor = cursor
        self._driver = driver
        self._closed = False

        description = cursor.description or ()
        self._column_names = tuple(col[0] for col in description)

    @property
    def column_names(self) -> Sequence[str]:
        return self._column_names

    def fetch_row(self) -> tuple[Any, ...] | None:
        if self._closed:
            return None

        self._driver._clear_error()

        try:
            row = self._cursor.fetchone()
        except pymysql.MySQLError as exc:
            self._driver._record_error(exc)
            return None

        return tuple(row) if row is not None else None

    def close(self) -> None:
        if self._closed:
            return

        self._closed = True

        try:
            self._cursor.close()
        except pymysql.MySQLError as exc:
            logger.debug("Error while closing result", exc_info=exc)


class PyMySQLDriver(Driver):
    """Driver for MySQL and MariaDB servers using PyMySQL

    Statements run with autocommit enabled. Buffered cursors are used for regular
    statements and unbuffered :class:`pymysql.cursors.SSCursor` for streamed results.
    """

    def __init__(self) -> None:
        self._conn: pymysql.connections.Connection | None = None
        self._error = NO_ERROR
        self._affected_rows = 0

    def _clear_error(self) -> None:
        self._error = NO_ERROR

    def _record_error(self, exc: Exception) -> None:
        self._error = error_from_exception(exc)
        logger.debug("MySQL error %s: %s", *self._error)

    @property
    def connection(self) -> pymysql.connections.Connection:
        if self._conn is None:
            raise pymysql.err.InterfaceError(CR_UNKNOWN_ERROR, "Not connected")
        return self._conn

    def connect(
        self, host: str, user: str, password: str, port: int, charset: str
    ) -> bool:
        self._clear_error()

        try:
            self._conn = pymysql.connect(
                host=host,
                user=user,
                password=password,
                port=port,
                charset=charset,
                autocommit=True,
            )
        except pymysql.MySQLError as exc:
            self._record_error(exc)
            return False

        return True

    def select_database(self, name: str) -> None:
        self._clear_error()

        try:
            self.connection.select_db(name)
        except pymysql.MySQLError as exc:
            self._record_error(exc)

    def set_charset(self, charset: str) -> None:
        self._clear_error()

        try:
            self.connection.set_character_set(charset)
        except pymysql.MySQLError as exc:
            self._record_error(exc)

    def escape(self, value: str) -> str:
        # with NO_BACKSLASH_ESCAPES the server only understands doubled quotes
        status = self.connection.server_status
        if status & SERVER_STATUS.SERVER_STATUS_NO_BACKSLASH_ESCAPES:
            return value.replace("'", "''")
        return escape_string(value)

    def execute(self, sql: str, stream: bool = False) -> PyMySQLResult | None:
        self._clear_error()

        cursor_class = pymysql.cursors.SSCursor if stream else pymysql.cursors.Cursor

        try:
            cursor = self.connection.cursor(cursor_class)
        except pymysql.MySQLError as exc:
            self._record_error(exc)
            return None

        try:
            # no arguments: PyMySQL sends the statement verbatim
            cursor.execute(sql)
        except pymysql.MySQLError as exc:
            self._record_error(exc)
            cursor.close()
            return None

        self._affected_rows = -1 if stream else cursor.rowcount

        return PyMySQLResult(cursor, self)

    def affected_rows(self) -> int:
        return self._affected_rows

    def last_error(self) -> tuple[int, str]:
        return self._error

    def close(self) -> None:
        if self._conn is None:
            return

        try:
            self._conn.close()
        except pymysql.MySQLError as exc:
            # the server may already have dropped the connection
            logger.debug("Error while closing connection", exc_info=exc)
        finally:
            self._conn = None
