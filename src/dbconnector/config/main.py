"""
This module contains the default configuration values and a function to return existing
config instances for a specified config_name.
"""

from __future__ import annotations

import threading

from packaging.version import Version

from .user import UserConfig, _DefaultsType
from .base import get_conf_path


CONFIG_DIR_NAME = "dbconnector"


# =============================================================================
#  Defaults
# =============================================================================

DEFAULTS_CONFIG: _DefaultsType = {
    "connection": {
        "database": "",  # name of the database to select
        "username": "",  # the password is kept in the system keyring
        "host": "localhost",
        "port": 3306,
        "charset": "utf8",  # session character set
    },
    "app": {
        "log_level": 20,  # log level for file and stderr, default: INFO
    },
}


KEY_SECTION_MAP = {"version": "main"}

for section_name, section_values in DEFAULTS_CONFIG.items():
    for key in section_values.keys():
        KEY_SECTION_MAP[key] = section_name


# Bump the major version when options are renamed or removed. Options which no longer
# have a default are dropped from existing config files on a major version change.
CONF_VERSION = Version("1.0")


# =============================================================================
# Factories
# =============================================================================


_config_instances: dict[str, UserConfig] = {}
_config_lock = threading.Lock()


def DbConnectorConfig(config_name: str) -> UserConfig:
    """
    Returns an existing config instance or creates a new one.

    :param config_name: Name of the configuration. A new config file will be created if
        none exists for the given config_name.
    :return: Config instance which saves any changes to the drive.
    """

    with _config_lock:
        try:
            return _config_instances[config_name]
        except KeyError:
            pass

        config_path = get_conf_path(CONFIG_DIR_NAME, f"{config_name}.ini")

        try:
            conf = UserConfig(
                config_path, defaults=DEFAULTS_CONFIG, version=CONF_VERSION
            )
        except OSError:
            conf = UserConfig(
                config_path,
                defaults=DEFAULTS_CONFIG,
                version=CONF_VERSION,
                load=False,
            )

        _config_instances[config_name] = conf

        return conf


def forget_config(config_name: str) -> None:
    """
    Drops the cached config instance for ``config_name``.

    :param config_name: Name of the configuration.
    """
    with _config_lock:
        _config_instances.pop(config_name, None)
