# -*- coding: utf-8 -*-
"""
This module defines dbconnector's error classes. It should be kept free of memory heavy
imports.

All errors inherit from :class:`DbError` which has title and message attributes to
display the error to the user. Driver error codes are never exposed as structured
fields, they are embedded in the message text instead.
"""


class DbError(Exception):
    """Base class for dbconnector errors

    :param title: A short description of the error type. This can be used in a CLI to
        give a short error summary.
    :param message: A more verbose description, typically the driver's error message
        together with its numeric error code.
    """

    def __init__(self, title: str, message: str = "") -> None:
        super().__init__(title, message)
        self.title = title
        self.message = message

    def __str__(self) -> str:
        if not self.message:
            return self.title
        return ". ".join([self.title, self.message])


class DbConnectionError(DbError):
    """Raised when connecting to the database server fails or when the connection has
    already been closed."""


class QueryError(DbError):
    """Raised when the driver reports an error after executing a statement."""


class DatabaseSelectError(DbConnectionError, QueryError):
    """Raised when the server rejects the requested database after a successful connect,
    for instance because it does not exist or access is denied."""


class CredentialError(DbError):
    """Raised when reading or writing a password in the system keyring fails."""


def format_driver_error(errno: int, error: str) -> str:
    """
    Formats a driver error for inclusion in an error message.

    :param errno: Numeric driver error code.
    :param error: Driver error description.
    :returns: Error description with the code appended.
    """
    return f"{error} (Error no. {errno})"
