# -*- coding: utf-8 -*-
"""
A thin convenience layer over a MySQL client: connect, quote values, run statements
with ``?`` placeholders and fetch rows lazily or all at once.
"""

__version__ = "1.0.0"
__author__ = "Gonzalo Chumillas"


from .connector import Connector, connect, connect_from_config  # noqa: E402
from .errors import (  # noqa: E402
    DbError,
    DbConnectionError,
    QueryError,
    DatabaseSelectError,
    CredentialError,
)
from .rows import Row, RowSource  # noqa: E402


__all__ = [
    "Connector",
    "connect",
    "connect_from_config",
    "DbError",
    "DbConnectionError",
    "QueryError",
    "DatabaseSelectError",
    "CredentialError",
    "Row",
    "RowSource",
]
