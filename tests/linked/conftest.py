import os
import logging

import pytest

from dbconnector import connect


logging.getLogger("dbconnector").setLevel(logging.DEBUG)


@pytest.fixture
def connection_args():
    return dict(
        database=os.environ.get("DBCONNECTOR_TEST_DATABASE", ""),
        username=os.environ.get("DBCONNECTOR_TEST_USER", "root"),
        password=os.environ.get("DBCONNECTOR_TEST_PASSWORD", ""),
        host=os.environ.get("DBCONNECTOR_TEST_HOST", "127.0.0.1"),
        port=int(os.environ.get("DBCONNECTOR_TEST_PORT", "3306")),
    )


@pytest.fixture
def db(connection_args):
    """
    Returns a connector to the test database with an empty table "items".
    """
    connector = connect(**connection_args)
    connector.exec("drop table if exists items")
    connector.exec(
        "create table items ("
        "id int auto_increment primary key, "
        "name varchar(255) null, "
        "col int null)"
    )

    yield connector

    connector.exec("drop table if exists items")
    connector.close()
