"""
This module provides functions for formatted output to stdout, including tables of
result rows.
"""

from __future__ import annotations

import enum
from typing import Any, Iterable, Sequence

import click
from rich.console import Console
from rich.table import Table


NULL_TEXT = "NULL"


# ==== printing structured data to console =============================================


def rich_table(*headers: str) -> Table:
    return Table(*headers, padding=(0, 2, 0, 0), box=None, show_header=len(headers) > 0)


def format_value(value: Any) -> str:
    """
    Formats a column value for display.

    :param value: Column value as returned by the driver.
    :returns: Display string, "NULL" for ``None``.
    """
    if value is None:
        return NULL_TEXT
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def print_rows(columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> int:
    """
    Prints result rows as a table.

    :param columns: Column names.
    :param rows: Rows to print.
    :returns: Number of printed rows.
    """
    table = rich_table(*columns)
    count = 0

    for row in rows:
        table.add_row(*(format_value(value) for value in row))
        count += 1

    Console().print(table)

    return count


# ==== printing messages to console ====================================================


class Prefix(enum.Enum):
    """Prefix for command line output"""

    Ok = 1
    Warn = 2
    NONE = 3


def echo(message: str, nl: bool = True, prefix: Prefix = Prefix.NONE) -> None:
    """
    Print a message to stdout.

    :param message: The string to output.
    :param nl: Whether to end with a new line.
    :param prefix: Any prefix to output before the message,
    """
    if prefix is Prefix.Ok:
        pre = click.style("✓", fg="green") + " "
    elif prefix is Prefix.Warn:
        pre = click.style("!", fg="red") + " "
    else:
        pre = ""

    click.echo(f"{pre}{message}", nl=nl)


def warn(message: str, nl: bool = True) -> None:
    """
    Print a warning to stdout. Will be prefixed with an exclamation mark.

    :param message: The string to output.
    :param nl: Whether to end with a new line.
    """
    echo(message, nl=nl, prefix=Prefix.Warn)


def ok(message: str, nl: bool = True) -> None:
    """
    Print a confirmation to stdout. Will be prefixed with a checkmark.

    :param message: The string to output.
    :param nl: Whether to end with a new line.
    """
    echo(message, nl=nl, prefix=Prefix.Ok)
