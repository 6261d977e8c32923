"""
Abstract driver and result interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence, Tuple


NO_ERROR: Tuple[int, str] = (0, "")


class DriverResult(ABC):
    """A result set returned by :meth:`Driver.execute`

    Rows are fetched one at a time in server order. Results are not restartable.
    """

    @property
    @abstractmethod
    def column_names(self) -> Sequence[str]:
        """Names of the result columns. Empty for statements without a result set."""
        raise NotImplementedError()

    @abstractmethod
    def fetch_row(self) -> tuple[Any, ...] | None:
        """
        Fetches the next row.

        :returns: Column values of the next row or ``None`` if all rows have been read.
        """
        raise NotImplementedError()

    @abstractmethod
    def close(self) -> None:
        """Releases the result. Unread rows are discarded."""
        raise NotImplementedError()


class Driver(ABC):
    """Capability set of a database client library

    A driver owns at most one connection. Methods which talk to the server record the
    outcome of the call, retrievable with :meth:`last_error`.
    """

    @abstractmethod
    def connect(
        self, host: str, user: str, password: str, port: int, charset: str
    ) -> bool:
        """
        Opens a connection to the database server.

        :param host: Server host name or address.
        :param user: User name.
        :param password: Password.
        :param port: Server port.
        :param charset: Character set to request during the handshake.
        :returns: Whether the connection was established.
        """
        raise NotImplementedError()

    @abstractmethod
    def select_database(self, name: str) -> None:
        """
        Selects the default database of the session.

        :param name: Database name.
        """
        raise NotImplementedError()

    @abstractmethod
    def set_charset(self, charset: str) -> None:
        """
        Sets the character set of the session.

        :param charset: Character set name, e.g. "utf8".
        """
        raise NotImplementedError()

    @abstractmethod
    def escape(self, value: str) -> str:
        """
        Escapes a string for use inside a quoted SQL literal, following the rules of the
        current connection and character set. The result is not wrapped in quotes.

        :param value: String to escape.
        :returns: Escaped string.
        """
        raise NotImplementedError()

    @abstractmethod
    def execute(self, sql: str, stream: bool = False) -> DriverResult | None:
        """
        Sends a statement to the server.

        :param sql: SQL statement.
        :param stream: If ``True``, request an unbuffered result which reads rows from
            the server on demand. The result must be consumed or closed before the next
            statement is executed.
        :returns: Result of the statement or ``None`` on failure.
        """
        raise NotImplementedError()

    @abstractmethod
    def affected_rows(self) -> int:
        """Number of rows changed by the most recent statement."""
        raise NotImplementedError()

    @abstractmethod
    def last_error(self) -> tuple[int, str]:
        """
        Error of the most recent call.

        :returns: Tuple of error code and message, :data:`NO_ERROR` if the call was
            successful.
        """
        raise NotImplementedError()

    @abstractmethod
    def close(self) -> None:
        """Closes the connection."""
        raise NotImplementedError()
