from __future__ import annotations

import logging
from typing import Any, Sequence, TYPE_CHECKING

import click

from .core import convert_db_errors, existing_config_option
from .output import echo, print_rows

if TYPE_CHECKING:
    from ..connector import Connector


def _to_arguments(values: Sequence[str], null: str | None) -> list[Any]:
    return [None if null is not None and value == null else value for value in values]


def _connect(config_name: str, ask_password: bool) -> Connector:
    from ..connector import connect_from_config
    from ..logging import setup_logging

    verbose = click.get_current_context().find_root().params.get("verbose", False)
    level = logging.DEBUG if verbose else None
    setup_logging(config_name, file=True, stderr=verbose, level=level)

    password = None

    if ask_password:
        password = click.prompt("Password", hide_input=True, default="")

    return connect_from_config(config_name, password=password)


password_option = click.option(
    "-p",
    "--password",
    "ask_password",
    is_flag=True,
    help="Prompt for the password instead of using the saved one.",
)

null_option = click.option(
    "--null",
    metavar="TEXT",
    default=None,
    help="Send arguments equal to TEXT as SQL null.",
)


@click.command(
    name="exec",
    help="""
Execute an SQL statement and print the number of affected rows.

Each ? placeholder in SQL is replaced by the next quoted ARGS value.
""",
)
@click.argument("sql")
@click.argument("args", nargs=-1)
@null_option
@password_option
@existing_config_option
@convert_db_errors
def exec_(
    sql: str,
    args: Sequence[str],
    null: str | None,
    ask_password: bool,
    config_name: str,
) -> None:
    with _connect(config_name, ask_password) as db:
        count = db.exec(sql, _to_arguments(args, null))

    echo(f"{count} row{'' if count == 1 else 's'} affected")


@click.command(
    help="""
Run a query and print the resulting rows as a table.

Each ? placeholder in SQL is replaced by the next quoted ARGS value.
""",
)
@click.argument("sql")
@click.argument("args", nargs=-1)
@null_option
@password_option
@existing_config_option
@convert_db_errors
def query(
    sql: str,
    args: Sequence[str],
    null: str | None,
    ask_password: bool,
    config_name: str,
) -> None:
    with _connect(config_name, ask_password) as db:
        with db.query(sql, _to_arguments(args, null)) as rows:
            count = print_rows(rows.columns, rows)

    echo(f"{count} row{'' if count == 1 else 's'} in set")
