"""
Database drivers for the connector.

A driver wraps a database client library behind the small capability set which the
:class:`dbconnector.connector.Connector` needs. Drivers do not raise on database errors,
they record the error code and message of the last call so that the connector can decide
how to surface it.
"""

from .base import Driver, DriverResult, NO_ERROR
from .mysql import PyMySQLDriver, PyMySQLResult

__all__ = ["Driver", "DriverResult", "NO_ERROR", "PyMySQLDriver", "PyMySQLResult"]
