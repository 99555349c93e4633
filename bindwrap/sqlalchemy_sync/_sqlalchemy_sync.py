from typing import Any
import re

import sqlalchemy as sa
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import StatementError
from sqlalchemy.orm import Session

from .._common import ErrorMode, FetchMode
from .._params import _SQL_SPLITTER, to_paramstyle
from .._statement import Statement
from .._wrap import WrapBase

# What `sa.text()` takes for a bind parameter, even in literals and comments
_TEXT_BIND = re.compile(r"(?<![:\w\\]):(\w+)(?!:)")


def _escape_text_binds(sql: str) -> str:
    return _SQL_SPLITTER.sub(lambda m: _TEXT_BIND.sub(r"\\:\1", m.group(0)), sql)


class SqlAlchemyStatement(Statement):
    """Statement executed as `sa.text()` through a Session or a Connection"""

    error_classes = (StatementError,)

    def __init__(
        self,
        session: Session | Connection,
        query: str,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
    ) -> None:
        super().__init__(query, error_mode, fetch_mode)
        self._session = session
        self._result: CursorResult | None = None

    def _execute(self) -> None:
        if self._result is not None:
            self._close()
        sql, params = to_paramstyle(self.query, self._values, "named")
        self._result = self._session.execute(
            sa.text(_escape_text_binds(sql)), params or {}
        )

    def columns(self) -> tuple[str, ...]:
        if self._result is None or not self._result.returns_rows:
            return ()
        return tuple(self._result.keys())

    def _fetch_row(self) -> tuple | None:
        if self._result is None or not self._result.returns_rows:
            return None
        row = self._result.fetchone()
        return None if row is None else tuple(row)

    def _fetch_rows(self) -> list[tuple]:
        if self._result is None or not self._result.returns_rows:
            return []
        return [tuple(row) for row in self._result.fetchall()]

    def _row_count(self) -> int:
        if self._result is None:
            return 0
        return max(self._result.rowcount, 0)

    def _close(self) -> None:
        if self._result is not None:
            self._result.close()
            self._result = None


class SqlAlchemyWrap(WrapBase):
    """
    Wrapper for a SQLAlchemy `Session` or `Connection`. Queries are executed as
    textual SQL with named bind parameters; positional `?` placeholders are
    renamed to `:_1`, `:_2`...

    No commit is done here: commit or roll back the session yourself.
    """

    def __init__(
        self,
        session: Session | Connection,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        collect_metrics: bool = True,
    ) -> None:
        super().__init__(session, error_mode, fetch_mode, collect_metrics)

    def prepare(self, query: str) -> SqlAlchemyStatement:
        return SqlAlchemyStatement(
            self._conn, query, error_mode=self.error_mode, fetch_mode=self.fetch_mode
        )


def wrap_engine(engine: sa.engine.Engine, **kwargs: Any) -> SqlAlchemyWrap:
    """Open a new Session on the engine and wrap it"""
    return SqlAlchemyWrap(Session(engine), **kwargs)
