from typing import Any
import sqlite3

from .._common import BindType, ErrorMode, FetchMode
from .._db_api_2 import DbApi2Statement, DbApi2Wrap


class SqliteStatement(DbApi2Statement):
    error_classes = (sqlite3.Error,)

    def encode_value(self, value: Any, type_: BindType) -> Any:
        # Objects adapting themselves to SQLite keep their own conversion
        if type_ is BindType.STR and getattr(type(value), "__conform__", None):
            return value
        return super().encode_value(value, type_)

    def get_paramstyle(self) -> str:
        # SQLite accepts both `?` and `:name` placeholders natively
        if self._values and isinstance(next(iter(self._values)), str):
            return "named"
        return "qmark"


class SqliteWrap(DbApi2Wrap):
    """
    Wrapper for a `sqlite3.Connection`.

    Example:
    ```
    import bindwrap.sqlite3 as bw

    db = bw.connect("my_db.sqlite")
    db.execute("insert into users(id, name) values(:id, :name)", {
        "id<i>": 1, "name": "Jon"
    })
    db.get_connection().commit()
    names = db.fetch_all(
        "select name from users where id in (:ids)",
        {"ids[i]": [1, 2, 3]},
        bw.FetchMode.COLUMN,
    )
    ```
    """

    statement_class = SqliteStatement

    def __init__(
        self,
        conn: sqlite3.Connection,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        collect_metrics: bool = True,
    ) -> None:
        super().__init__(conn, "qmark", error_mode, fetch_mode, collect_metrics)

    def error_classes(self) -> None:
        return None


def connect(
    database: str,
    error_mode: ErrorMode | None = None,
    fetch_mode: FetchMode = FetchMode.TUPLE,
    collect_metrics: bool = True,
    **kwargs,
) -> SqliteWrap:
    """
    Open an SQLite database and wrap the connection.

    :param database: database file name or ":memory:"
    :param kwargs: passed to `sqlite3.connect`
    """
    return SqliteWrap(
        sqlite3.connect(database, **kwargs), error_mode, fetch_mode, collect_metrics
    )
