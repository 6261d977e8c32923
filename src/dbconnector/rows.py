"""
Result rows and lazy row sources.
"""

from __future__ import annotations

from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Sequence,
    Tuple,
    Union,
    TYPE_CHECKING,
    overload,
)

if TYPE_CHECKING:
    from .connector import Connector
    from .driver import DriverResult


__all__ = ["Row", "RowSource", "column_index"]


def column_index(column_names: Sequence[str]) -> Dict[str, int]:
    """
    Maps column names to positions. If several columns share a name, the last one wins.

    :param column_names: Column names in result order.
    :returns: Mapping of column name to position.
    """
    return {name: i for i, name in enumerate(column_names)}


class Row(Sequence[Any]):
    """A result row with access by column position and by column name

    ``row[0]`` returns the value of the first column and ``row["name"]`` the value of
    the column called "name". Iterating over a row yields its values, like a tuple.

    :param index: Mapping of column name to position, shared by all rows of a result.
    :param values: Column values.
    """

    __slots__ = ("_index", "_values")

    def __init__(self, index: Mapping[str, int], values: Sequence[Any]) -> None:
        self._index = index
        self._values = tuple(values)

    @overload
    def __getitem__(self, key: Union[int, str]) -> Any:
        ...

    @overload
    def __getitem__(self, key: slice) -> Tuple[Any, ...]:
        ...

    def __getitem__(self, key: Union[int, str, slice]) -> Any:
        if isinstance(key, str):
            try:
                return self._values[self._index[key]]
            except KeyError:
                raise KeyError(f"No column named '{key}'") from None
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Row):
            return self._values == other._values and self.keys() == other.keys()
        if isinstance(other, tuple):
            return self._values == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.as_dict()})>"

    def keys(self) -> List[str]:
        """Returns the column names in result order."""
        return sorted(self._index, key=self._index.__getitem__)

    def get(self, key: Union[int, str], default: Any = None) -> Any:
        """Returns the value for a column name or position, or ``default``."""
        try:
            return self[key]
        except (KeyError, IndexError):
            return default

    def as_dict(self) -> Dict[str, Any]:
        """Returns a dictionary of column names to values."""
        return {name: self._values[i] for name, i in self._index.items()}


class RowSource:
    """Lazy sequence of rows returned by a query

    The statement is executed when the row source is created. Rows are then read from
    the server on demand, either by iterating or by index access. Rows which have been
    read are retained so that any row can be accessed by index. Once all rows have been
    read, the underlying result is released.

    The row source borrows the connection of ``connector`` and never closes it. It must
    be consumed completely or closed before another statement is executed on the same
    connector.

    Example::

        rows = db.query("select id, name from mytable where section = ?", "a-section")
        for row in rows:
            print(row["id"], row["name"])

        count = db.query("select count(*) from mytable")[0][0]

    :param connector: Connector to execute the statement with.
    :param sql: SQL statement with ``?`` placeholders.
    :param arguments: A single scalar or a list or tuple of scalars.
    :raises QueryError: if the driver reports an error.
    """

    def __init__(self, connector: Connector, sql: str, arguments: Any = ()) -> None:
        self._connector = connector
        self._result: DriverResult | None = connector._execute(
            sql, arguments, stream=True
        )
        self._columns: Tuple[str, ...] = tuple(self._result.column_names)
        self._index = column_index(self._columns)
        self._rows: List[Row] = []

    @property
    def columns(self) -> Tuple[str, ...]:
        """Column names of the result. Empty for statements without a result set."""
        return self._columns

    @property
    def exhausted(self) -> bool:
        """Whether all rows have been read from the server or the source was closed."""
        return self._result is None

    def _fetch(self) -> Row | None:
        """Reads the next row from the driver and retains it."""
        if self._result is None:
            return None

        values = self._result.fetch_row()

        if values is None:
            self.close()
            self._connector._check_driver_error("Failed to fetch rows")
            return None

        row = Row(self._index, values)
        self._rows.append(row)
        return row

    def _fetch_all(self) -> None:
        while self._fetch() is not None:
            pass

    def __getitem__(self, index: int) -> Row:
        if index < 0:
            self._fetch_all()
            return self._rows[index]

        while len(self._rows) <= index:
            if self._fetch() is None:
                raise IndexError("row index out of range")

        return self._rows[index]

    def __iter__(self) -> Iterator[Row]:
        i = 0
        while True:
            if i < len(self._rows):
                yield self._rows[i]
            else:
                row = self._fetch()
                if row is None:
                    return
                yield row
            i += 1

    def __len__(self) -> int:
        self._fetch_all()
        return len(self._rows)

    def __bool__(self) -> bool:
        return len(self._rows) > 0 or self._fetch() is not None

    def close(self) -> None:
        """Releases the driver result. Rows read so far remain accessible."""
        if self._result is not None:
            result = self._result
            self._result = None
            result.close()

    def __enter__(self) -> RowSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(columns={self._columns}, "
            f"read={len(self._rows)}, exhausted={self.exhausted})>"
        )
