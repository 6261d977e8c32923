"""
This module provides custom click parameters for config names and config keys, the
CLI exception type and a decorator which turns database errors into CLI output.
"""
from __future__ import annotations

import functools
import sys
from typing import Any, Callable, TypeVar

import click
from click.shell_completion import CompletionItem

from .output import warn


T = TypeVar("T")

DEFAULT_CONFIG_NAME = "dbconnector"


# ==== Custom parameter types ==========================================================


class ConfigKey(click.ParamType):
    """A command line parameter representing a config key

    Only keys with a default value are accepted. This parameter type provides shell
    completion for existing config keys.
    """

    name = "key"

    def convert(
        self,
        value: str | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> str | None:
        from ..config.main import KEY_SECTION_MAP

        if value is None or value in KEY_SECTION_MAP:
            return value

        raise CliException(f"'{value}' is not a valid configuration key.")

    def shell_complete(
        self,
        ctx: click.Context | None,
        param: click.Parameter | None,
        incomplete: str,
    ) -> list[CompletionItem]:
        from ..config.main import KEY_SECTION_MAP as KEYS

        return [CompletionItem(key) for key in KEYS if key.startswith(incomplete)]


class ConfigName(click.ParamType):
    """A command line parameter representing a config name

    This parameter type provides shell completion for existing config names.

    :param existing: If ``True`` require an existing config, otherwise create a new
        config on demand.
    """

    name = "config"

    def __init__(self, existing: bool = True) -> None:
        self.existing = existing

    def convert(
        self,
        value: str | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> str | None:
        if value is None:
            return value

        from ..config import validate_config_name, list_configs

        if not self.existing:
            try:
                return validate_config_name(value)
            except ValueError:
                raise CliException(
                    "Configuration name may not be empty or contain any whitespace"
                )

        if value in list_configs():
            return value

        raise CliException(
            f"Configuration '{value}' does not exist. "
            f"Use 'dbconnector config set' to create it."
        )

    def shell_complete(
        self,
        ctx: click.Context | None,
        param: click.Parameter | None,
        incomplete: str,
    ) -> list[CompletionItem]:
        from ..config import list_configs

        matches = [conf for conf in list_configs() if conf.startswith(incomplete)]
        return [CompletionItem(m) for m in matches]


existing_config_option = click.option(
    "-c",
    "--config-name",
    default=DEFAULT_CONFIG_NAME,
    type=ConfigName(existing=True),
    is_eager=True,
    expose_value=True,
    help="Run command with the given configuration.",
)

config_option = click.option(
    "-c",
    "--config-name",
    default=DEFAULT_CONFIG_NAME,
    type=ConfigName(existing=False),
    is_eager=True,
    expose_value=True,
    help="Run command with the given configuration.",
)


# ==== custom exceptions ===============================================================


class CliException(click.ClickException):
    """
    Subclass of :class:`click.ClickException` with a nicely formatted error message.
    """

    def show(self, file: Any = None) -> None:
        warn(self.format_message())


def convert_db_errors(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator that catches a :class:`dbconnector.errors.DbError` and prints a formatted
    error message to stdout before exiting. Calls ``sys.exit(1)`` after printing the
    error to stdout.
    """

    from ..errors import DbError

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except DbError as exc:
            warn(str(exc))
            sys.exit(1)

    return wrapper
