from __future__ import annotations

import ast
import io

import click

from .core import (
    CliException,
    ConfigKey,
    config_option,
    convert_db_errors,
    existing_config_option,
)
from .output import echo, ok, warn


@click.group(help="Read and write connection settings.")
def config() -> None:
    pass


@config.command(name="get", help="Print the value of a given configuration key.")
@click.argument("key", type=ConfigKey())
@existing_config_option
def config_get(key: str, config_name: str) -> None:
    from ..config import DbConnectorConfig
    from ..config.main import KEY_SECTION_MAP

    section = KEY_SECTION_MAP[key]
    echo(str(DbConnectorConfig(config_name).get(section, key)))


@config.command(
    name="set",
    help="""
Update configuration with a value for the given key. The configuration is created if it
does not exist yet.

Values will be cast to the proper type, raising an error where this is not possible.
""",
)
@click.argument("key", type=ConfigKey())
@click.argument("value")
@config_option
def config_set(key: str, value: str, config_name: str) -> None:
    from ..config import DbConnectorConfig
    from ..config.main import KEY_SECTION_MAP, DEFAULTS_CONFIG

    section = KEY_SECTION_MAP[key]

    if section not in DEFAULTS_CONFIG:
        raise CliException(f"'{key}' cannot be changed.")

    default_value = DEFAULTS_CONFIG[section][key]

    if isinstance(default_value, str):
        py_value = value
    else:
        try:
            py_value = ast.literal_eval(value)
        except (SyntaxError, ValueError):
            py_value = value

    try:
        DbConnectorConfig(config_name).set(section, key, py_value)
    except ValueError as e:
        warn(e.args[0])
    else:
        ok(f"Set {key} to {py_value!r}.")


@config.command(name="show", help="Show all config keys and values.")
@existing_config_option
def config_show(config_name: str) -> None:
    from ..config import DbConnectorConfig

    conf = DbConnectorConfig(config_name)

    with io.StringIO() as fp:
        conf.write(fp)
        echo(fp.getvalue().rstrip())


@config.command(
    name="remove",
    help="""
Delete a configuration file. A password saved in the keyring is kept, use
'dbconnector password delete' first to remove it as well.
""",
)
@existing_config_option
def config_remove(config_name: str) -> None:
    from ..config import DbConnectorConfig, remove_configuration

    path = DbConnectorConfig(config_name).config_path
    remove_configuration(config_name)

    ok(f"Removed: {path}")


@click.command(name="config-files", help="List all configured connections.")
def config_files() -> None:
    from ..config import DbConnectorConfig, list_configs

    for name in list_configs():
        conf = DbConnectorConfig(name)
        username = conf.get("connection", "username")
        host = conf.get("connection", "host")
        database = conf.get("connection", "database")
        echo(f"{name}: {username}@{host}/{database}")


@click.group(help="Manage the password saved in the system keyring.")
def password() -> None:
    pass


@password.command(name="set", help="Save the database password in the keyring.")
@click.password_option()
@existing_config_option
@convert_db_errors
def password_set(password: str, config_name: str) -> None:
    from ..keyring import CredentialStorage

    cred_storage = CredentialStorage(config_name)
    cred_storage.save_password(password)

    ok(f"Saved password for {cred_storage.account}.")


@password.command(name="delete", help="Delete the saved database password.")
@existing_config_option
@convert_db_errors
def password_delete(config_name: str) -> None:
    from ..keyring import CredentialStorage

    cred_storage = CredentialStorage(config_name)
    cred_storage.delete_password()

    ok(f"Deleted password for {cred_storage.account}.")
