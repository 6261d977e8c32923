import pytest

from dbconnector.errors import QueryError
from dbconnector.rows import Row, RowSource, column_index


@pytest.fixture
def row():
    return Row(column_index(("id", "name")), (1, "alice"))


def test_row_access(row):
    assert row[0] == 1
    assert row[1] == "alice"
    assert row[-1] == "alice"
    assert row["id"] == 1
    assert row["name"] == "alice"
    assert row[0:2] == (1, "alice")
    assert len(row) == 2
    assert list(row) == [1, "alice"]


def test_row_missing_column(row):
    with pytest.raises(KeyError):
        row["missing"]

    with pytest.raises(IndexError):
        row[2]

    assert row.get("missing") is None
    assert row.get(5, "default") == "default"


def test_row_mapping_helpers(row):
    assert row.keys() == ["id", "name"]
    assert row.as_dict() == {"id": 1, "name": "alice"}
    assert "alice" in row

    assert row.get("name") == "alice"
    assert row.get(0) == 1


def test_row_equality(row):
    assert row == Row(column_index(("id", "name")), (1, "alice"))
    assert row == (1, "alice")
    assert row != Row(column_index(("id", "other")), (1, "alice"))


def test_duplicate_column_names():
    """The last column with a given name wins for named access"""
    row = Row(column_index(("id", "id")), (1, 2))
    assert row["id"] == 2
    assert row[0] == 1


def test_row_source_is_lazy(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[(1,), (2,), (3,)])

    rows = db.query("select id from t")
    result = driver.results[-1]

    assert driver.streamed[-1] is True
    assert result.fetched == 0

    assert rows[0]["id"] == 1
    assert result.fetched == 1

    assert rows[1][0] == 2
    assert result.fetched == 2
    assert not rows.exhausted

    rows.close()
    assert result.closed


def test_row_source_iteration(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[(1,), (2,), (3,)])

    rows = db.query("select id from t")

    assert rows[1][0] == 2
    assert [row[0] for row in rows] == [1, 2, 3]
    assert rows.exhausted
    assert driver.results[-1].closed


def test_row_source_len_and_negative_index(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[(1,), (2,), (3,)])

    rows = db.query("select id from t")

    assert rows[-1][0] == 3
    assert len(rows) == 3
    assert rows.exhausted


def test_row_source_index_out_of_range(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[(1,)])

    rows = db.query("select id from t")

    with pytest.raises(IndexError):
        rows[1]

    assert rows[0][0] == 1


def test_row_source_empty(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[])

    rows = db.query("select id from t")

    assert rows.columns == ("id",)
    assert not rows
    assert list(rows) == []
    assert len(rows) == 0


def test_row_source_without_result_set(db, driver):
    rows = db.query("set @a = 1")

    assert rows.columns == ()
    assert list(rows) == []


def test_row_source_context_manager(db, driver):
    driver.respond("select id from t", columns=("id",), rows=[(1,), (2,)])

    with db.query("select id from t") as rows:
        assert rows[0][0] == 1

    assert driver.results[-1].closed


def test_row_source_fetch_error(db, driver):
    driver.respond(
        "select id from t",
        columns=("id",),
        rows=[(1,)],
        fetch_error=(2013, "Lost connection to MySQL server during query"),
    )

    rows = db.query("select id from t")
    assert rows[0][0] == 1

    with pytest.raises(QueryError) as exc_info:
        list(rows)

    assert "2013" in str(exc_info.value)
    assert rows.exhausted


def test_row_source_direct_construction(db, driver):
    driver.respond("select name from t where id = '7'", columns=("name",), rows=[("x",)])

    rows = RowSource(db, "select name from t where id = ?", 7)

    assert rows[0]["name"] == "x"
