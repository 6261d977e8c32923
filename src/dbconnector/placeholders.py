"""
Client side substitution of ``?`` placeholders in SQL statements.

This is plain text substitution and not a prepared statement: every argument is quoted
and spliced into the statement before it is sent to the server. Nothing but the quoting
function protects against SQL injection.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Sequence

PLACEHOLDER = "?"

_placeholder_re = re.compile(re.escape(PLACEHOLDER))


def normalize_arguments(arguments: Any) -> Sequence[Any]:
    """
    Converts statement arguments to a sequence.

    Lists and tuples are returned as given. Any other value, including ``None``, strings
    and bytes, is treated as a single argument.

    :param arguments: A single scalar or a list or tuple of scalars.
    :returns: Sequence of arguments.
    """
    if isinstance(arguments, (list, tuple)):
        return arguments
    return (arguments,)


def substitute_placeholders(
    sql: str, arguments: Any, quote: Callable[[Any], str]
) -> str:
    """
    Replaces placeholders in an SQL statement with quoted arguments.

    The statement is scanned from left to right and the i-th placeholder is replaced by
    ``quote(arguments[i])``. Placeholders without a matching argument are left in the
    statement unchanged and surplus arguments are ignored.

    :param sql: SQL statement.
    :param arguments: A single scalar or a list or tuple of scalars.
    :param quote: Callable which returns the SQL literal for a value.
    :returns: SQL statement with placeholders replaced.
    """
    args = normalize_arguments(arguments)
    count = 0

    def replace(match: re.Match) -> str:
        nonlocal count

        if count >= len(args):
            return match.group(0)

        value = args[count]
        count += 1
        return quote(value)

    return _placeholder_re.sub(replace, sql)


def count_placeholders(sql: str) -> int:
    """Returns the number of placeholders in an SQL statement."""
    return sql.count(PLACEHOLDER)
