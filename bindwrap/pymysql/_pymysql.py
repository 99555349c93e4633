import pymysql
from pymysql import Connection

from .._common import ErrorMode, FetchMode
from .._db_api_2 import DbApi2Statement, DbApi2Wrap


class PyMySQLStatement(DbApi2Statement):
    error_classes = (pymysql.Error,)


class PyMySQLWrap(DbApi2Wrap):
    """
    Wrapper for a PyMySQL connection. Queries are sent with `%s` placeholders for
    positional parameters and `%(name)s` for named ones.
    """

    statement_class = PyMySQLStatement

    def __init__(
        self,
        conn: Connection,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        collect_metrics: bool = True,
    ) -> None:
        super().__init__(conn, "pyformat", error_mode, fetch_mode, collect_metrics)

    def error_classes(self) -> None:
        return None
