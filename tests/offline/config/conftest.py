# -*- coding: utf-8 -*-

import pytest
from packaging.version import Version
from dbconnector.config.user import UserConfig


DEFAULTS_CONFIG = {
    "connection": {
        "database": "inventory",
        "username": "leslie",
        "port": 3306,
    },
    "app": {
        "log_level": 20,
        "verbose": False,
    },
}

CONF_VERSION = Version("1.0.0")


@pytest.fixture
def config(tmp_path):

    config_path = tmp_path / "test-config.ini"

    conf = UserConfig(
        str(config_path),
        defaults=DEFAULTS_CONFIG,
        version=CONF_VERSION,
    )

    yield conf

    conf.cleanup()
