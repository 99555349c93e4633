"""
Prepared statement interface the wrappers are built on.

A statement is created for one (already rewritten) query, receives its values with
`bind_value`, and then can be executed and fetched. Driver adapters implement the
underscore-prefixed hooks.
"""

from typing import Any
from datetime import date, datetime
import logging

from ._common import BindType, ErrorMode, FetchMode, default_error_mode
from ._rows import make_row_shaper

logger = logging.getLogger(__name__)


def coerce_value(value: Any, type_: BindType) -> Any:
    """Convert a value to the bind type. None is always bound as NULL."""
    if value is None:
        return None
    if type_ is BindType.INT:
        return int(value)
    if type_ is BindType.BOOL:
        if isinstance(value, str):
            return value not in ("", "0")
        return bool(value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        return value
    return str(value)


class Statement:
    """
    A query prepared for execution.

    Lifecycle: `bind_value` for every placeholder, `execute`, then `fetch`,
    `fetch_all`, or `fetch_column` for queries returning rows, `row_count` for
    data manipulation. `close_cursor` releases the result set.
    """

    # Driver errors that `execute` handles according to the error mode
    error_classes: tuple[type[Exception], ...] = ()

    def __init__(
        self,
        query: str,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
    ) -> None:
        self.query = query
        self.error_mode = error_mode or default_error_mode()
        self.fetch_mode = fetch_mode
        self.error: Exception | None = None
        self._values: dict[int | str, Any] = {}

    @property
    def bound_values(self) -> dict[int | str, Any]:
        return dict(self._values)

    def encode_value(self, value: Any, type_: BindType) -> Any:
        return coerce_value(value, type_)

    def bind_value(
        self, token: int | str, value: Any, type_: BindType = BindType.STR
    ) -> None:
        """
        Bind a value to a placeholder.

        :param token: 1-based position for `?` placeholders or `:name`
        :param value: the value
        :param type_: type the value is converted to
        """
        if isinstance(token, int):
            if token < 1:
                raise ValueError(f"Positional placeholders are 1-based, got {token}")
        elif not token.startswith(":"):
            token = ":" + token
        self._values[token] = self.encode_value(value, type_)

    def execute(self) -> bool:
        """
        Execute the statement with the bound values.

        :return: True on success. On a driver error returns False in SILENT and
        WARNING error modes and raises in EXCEPTION mode. The error is kept in
        the `error` attribute.
        """
        self.error = None
        logger.debug("Executing %r, %d values bound", self.query, len(self._values))
        try:
            self._execute()
        except self.error_classes as exc:
            self.error = exc
            if self.error_mode is ErrorMode.EXCEPTION:
                raise
            if self.error_mode is ErrorMode.WARNING:
                log = logger.warning
            else:
                log = logger.debug
            log("Query %r failed: %s: %s", self.query, type(exc).__name__, exc)
            return False
        return True

    def fetch(self, mode: FetchMode | None = None, arg: Any = None) -> Any:
        """Fetch the next row. Returns None when there are no more rows."""
        row = self._fetch_row()
        if row is None:
            return None
        return make_row_shaper(self.columns(), mode or self.fetch_mode, arg)(row)

    def fetch_all(self, mode: FetchMode | None = None, arg: Any = None) -> list:
        """Fetch all remaining rows."""
        rows = self._fetch_rows()
        if not rows:
            return []
        shaper = make_row_shaper(self.columns(), mode or self.fetch_mode, arg)
        return [shaper(row) for row in rows]

    def fetch_column(self, column: int = 0) -> Any:
        return self.fetch(FetchMode.COLUMN, column)

    def row_count(self) -> int:
        """Number of rows affected by the last executed data manipulation."""
        return self._row_count()

    def close_cursor(self) -> None:
        self._close()

    def columns(self) -> tuple[str, ...]:
        raise NotImplementedError

    def _execute(self) -> None:
        raise NotImplementedError

    def _fetch_row(self) -> tuple | None:
        raise NotImplementedError

    def _fetch_rows(self) -> list[tuple]:
        raise NotImplementedError

    def _row_count(self) -> int:
        raise NotImplementedError

    def _close(self) -> None:
        raise NotImplementedError
