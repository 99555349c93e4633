"""
Statement and wrapper for any DB-API 2.0 (PEP 249) connection.

Bound values are sent with the driver's `paramstyle`, the query is converted
accordingly when executed.
"""

from typing import Any
import sys

from ._common import ErrorMode, FetchMode
from ._params import check_paramstyle, to_paramstyle
from ._statement import Statement
from ._wrap import WrapBase


class DbApi2Statement(Statement):
    def __init__(
        self,
        conn: Any,
        query: str,
        paramstyle: str = "qmark",
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        error_classes: tuple[type[Exception], ...] | None = None,
    ) -> None:
        super().__init__(query, error_mode, fetch_mode)
        self._conn = conn
        self.paramstyle = check_paramstyle(paramstyle)
        if error_classes is not None:
            self.error_classes = error_classes
        self._cursor: Any = None

    def get_paramstyle(self) -> str:
        return self.paramstyle

    def _execute(self) -> None:
        if self._cursor is not None:
            self._close()
        sql, params = to_paramstyle(self.query, self._values, self.get_paramstyle())
        self._cursor = self._conn.cursor()
        if params is None:
            self._cursor.execute(sql)
        else:
            self._cursor.execute(sql, params)

    def columns(self) -> tuple[str, ...]:
        if self._cursor is None or not self._cursor.description:
            return ()
        return tuple(el[0] for el in self._cursor.description)

    def _fetch_row(self) -> tuple | None:
        if self._cursor is None or self._cursor.description is None:
            return None
        return self._cursor.fetchone()

    def _fetch_rows(self) -> list[tuple]:
        if self._cursor is None or self._cursor.description is None:
            return []
        return list(self._cursor.fetchall())

    def _row_count(self) -> int:
        if self._cursor is None:
            return 0
        return max(self._cursor.rowcount, 0)

    def _close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


def _driver_module(conn: Any):
    return sys.modules.get(type(conn).__module__.partition(".")[0])


def driver_paramstyle(conn: Any) -> str:
    return getattr(_driver_module(conn), "paramstyle", "qmark")


def driver_error_classes(conn: Any) -> tuple[type[Exception], ...]:
    # PEP 249 optional extension exposes the error classes on the connection
    error_cls = getattr(conn, "Error", None) or getattr(
        _driver_module(conn), "Error", None
    )
    if isinstance(error_cls, type) and issubclass(error_cls, Exception):
        return (error_cls,)
    return ()


class DbApi2Wrap(WrapBase):
    """
    Wrapper for a DB-API 2.0 connection of any driver.

    :param conn: an open connection
    :param paramstyle: placeholder style the driver accepts. By default the
    `paramstyle` of the driver module, or "qmark" if it cannot be found.
    :param error_mode: what to do when the driver fails to execute a statement.
    By default taken from the BINDWRAP_ERROR_MODE environment variable, "warning"
    if not set.
    :param fetch_mode: default shape of fetched rows
    :param collect_metrics: report executions to the registry
    """

    statement_class: type[DbApi2Statement] = DbApi2Statement

    def __init__(
        self,
        conn: Any,
        paramstyle: str | None = None,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        collect_metrics: bool = True,
    ) -> None:
        super().__init__(conn, error_mode, fetch_mode, collect_metrics)
        self.paramstyle = check_paramstyle(paramstyle or driver_paramstyle(conn))

    def error_classes(self) -> tuple[type[Exception], ...] | None:
        return driver_error_classes(self._conn)

    def prepare(self, query: str) -> DbApi2Statement:
        return self.statement_class(
            self._conn,
            query,
            paramstyle=self.paramstyle,
            error_mode=self.error_mode,
            fetch_mode=self.fetch_mode,
            error_classes=self.error_classes(),
        )
