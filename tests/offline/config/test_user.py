import configparser as cp
import copy

import pytest

from packaging.version import Version
from dbconnector.config import (
    DbConnectorConfig,
    list_configs,
    remove_configuration,
    validate_config_name,
)
from dbconnector.config.user import UserConfig

from .conftest import DEFAULTS_CONFIG, CONF_VERSION


def test_config_creation(config):
    # Check that all config values have been set correctly.

    for section_name, section in DEFAULTS_CONFIG.items():
        for option, value in section.items():
            assert config.get(section_name, option) == value

    assert config.get_version() == CONF_VERSION


def test_get_failures(config):
    # Check getting non-existing config options.
    with pytest.raises(cp.NoOptionError):
        config.get("main", "invalid_option")

    with pytest.raises(cp.NoSectionError):
        config.get("invalid_section", "invalid_option")

    assert config.get("main", "invalid_option", "default") == "default"
    assert config.get("invalid_section", "invalid_option", "default") == "default"


def test_set_option(config):
    # Test setting valid config values of different types.
    config.set("connection", "database", "orders")
    config.set("connection", "port", 3307)
    config.set("new_section", "new_option", ["a", "b"])

    assert config.get("connection", "database") == "orders"
    assert config.get("connection", "port") == 3307
    assert config.get("new_section", "new_option") == ["a", "b"]

    # Check setting invalid config values.
    with pytest.raises(ValueError):
        config.set("connection", "database", 1234)

    with pytest.raises(ValueError):
        config.set("connection", "port", "3307")

    with pytest.raises(ValueError):
        config.set("app", "verbose", 1)


def test_string_values_are_not_evaluated(config):
    config.set("connection", "database", "[1, 2]")
    assert config.get("connection", "database") == "[1, 2]"


def test_persistence(config):
    config.set("connection", "database", "orders")

    conf = UserConfig(
        config.config_path, defaults=DEFAULTS_CONFIG, version=CONF_VERSION
    )

    assert conf.get("connection", "database") == "orders"
    assert conf.get("connection", "username") == "leslie"


def test_update(config):
    config.set("connection", "database", "orders")
    config.set("app", "obsolete", "remove me")

    defaults = copy.deepcopy(DEFAULTS_CONFIG)
    defaults["connection"]["charset"] = "utf8mb4"

    # minor version change keeps options without defaults
    conf = UserConfig(
        config.config_path, defaults=defaults, version=Version("1.1.0")
    )

    assert conf.get_version() == Version("1.1.0")
    assert conf.get("connection", "database") == "orders"
    assert conf.get("connection", "charset") == "utf8mb4"
    assert conf.get("app", "obsolete") == "remove me"

    # major version change removes options without defaults
    conf = UserConfig(
        config.config_path, defaults=defaults, version=Version("2.0.0")
    )

    assert conf.get_version() == Version("2.0.0")
    assert conf.get("connection", "database") == "orders"

    with pytest.raises(cp.NoOptionError):
        conf.get("app", "obsolete")


def test_reset_to_defaults(config):
    config.set("connection", "database", "orders")
    config.reset_to_defaults(section="connection")

    assert config.get("connection", "database") == "inventory"


def test_cleanup(config, tmp_path):
    config.save()
    assert (tmp_path / "test-config.ini").is_file()

    config.cleanup()
    assert not (tmp_path / "test-config.ini").is_file()


def test_named_configs():
    assert list_configs() == []

    conf = DbConnectorConfig("first")
    assert DbConnectorConfig("first") is conf
    assert conf.get("connection", "host") == "localhost"
    assert conf.get("connection", "port") == 3306

    DbConnectorConfig("second")
    assert list_configs() == ["first", "second"]

    remove_configuration("first")
    assert list_configs() == ["second"]
    assert DbConnectorConfig("first") is not conf


@pytest.mark.parametrize("name", ["dbconnector", "test-config", "a_b"])
def test_valid_config_name(name):
    assert validate_config_name(name) == name


@pytest.mark.parametrize("name", ["", "has space", "tab\tname"])
def test_invalid_config_name(name):
    with pytest.raises(ValueError):
        validate_config_name(name)
