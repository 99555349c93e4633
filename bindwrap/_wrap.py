from typing import Any, Collection, Mapping
import logging

from ._common import BindInstruction, ErrorMode, FetchMode
from ._params import parse_params
from ._statement import Statement
from .registry import MetricsCollector

logger = logging.getLogger(__name__)

Params = Collection | Mapping | None


class WrapBase:
    """
    Connection wrapper with typed parameter binding.

    Adapters implement `prepare`, the rest is common:
    - `parse_params(query, params)` rewrites the query and makes bind instructions
    - `prepare_bind(query, params)` prepares a statement and binds the values
    - `execute(query, params)` returns the number of affected rows
    - `fetch_all(query, params, *fetch_args)` returns a list of rows
    - `fetch_one(query, params, *fetch_args)` returns the first row

    The three query helpers return None when the statement fails to execute
    (unless the error mode is `ErrorMode.EXCEPTION`). Malformed parameter names
    and values that cannot be converted to their bind type always raise.
    """

    def __init__(
        self,
        conn: Any,
        error_mode: ErrorMode | None = None,
        fetch_mode: FetchMode = FetchMode.TUPLE,
        collect_metrics: bool = True,
    ) -> None:
        self._conn = conn
        self.error_mode = error_mode
        self.fetch_mode = fetch_mode
        self.collect_metrics = collect_metrics

    def get_connection(self) -> Any:
        return self._conn

    def parse_params(
        self, query: str, params: Params = None
    ) -> tuple[str, list[BindInstruction]]:
        return parse_params(query, params)

    def prepare(self, query: str) -> Statement:
        raise NotImplementedError

    def prepare_bind(self, query: str, params: Params = None) -> Statement:
        """
        Prepare a statement for the query and bind the parameters by value.

        `?` placeholders are bound as strings by position. Named parameters may
        carry a type suffix, `{":id[i]": [5, 15]}` binds two integers to
        `IN(:id)` rewritten as `IN(:id0,:id1)`.

        :param query: SQL query with `?` or `:name` placeholders
        :param params: list of values or mapping of names to values
        :return: statement ready for execution
        :raises MalformedParameterName: a named parameter key is not valid
        """
        parsed_query, binds = self.parse_params(query, params)
        stmt = self.prepare(parsed_query)
        for bind in binds:
            stmt.bind_value(bind.token, bind.value, bind.type)
        logger.debug("Prepared %r with %d bound values", parsed_query, len(binds))
        return stmt

    def execute(self, query: str, params: Params = None) -> int | None:
        """
        Execute a data manipulation query.

        :return: number of affected rows, or None if execution failed
        """
        with MetricsCollector(query, self.collect_metrics) as mc:
            stmt = self.prepare_bind(query, params)
            if not stmt.execute():
                mc.fail(stmt.error)
                return None
            mc.rows = stmt.row_count()
            return mc.rows

    def fetch_all(self, query: str, params: Params = None, *fetch_args) -> list | None:
        """
        Execute a query and fetch all rows.

        :param fetch_args: passed to `Statement.fetch_all`: a `FetchMode` and its
        argument (column index or row type)
        :return: list of rows, or None if execution failed
        """
        with MetricsCollector(query, self.collect_metrics) as mc:
            stmt = self.prepare_bind(query, params)
            if not stmt.execute():
                mc.fail(stmt.error)
                return None
            res = stmt.fetch_all(*fetch_args)
            mc.rows = len(res)
            return res

    def fetch_one(self, query: str, params: Params = None, *fetch_args) -> Any:
        """
        Execute a query, fetch the first row and close the cursor.

        :param fetch_args: passed to `Statement.fetch`
        :return: the row, or None if there are no rows or execution failed
        """
        with MetricsCollector(query, self.collect_metrics) as mc:
            stmt = self.prepare_bind(query, params)
            if not stmt.execute():
                mc.fail(stmt.error)
                return None
            try:
                res = stmt.fetch(*fetch_args)
            finally:
                stmt.close_cursor()
            if res is not None:
                mc.rows = 1
            return res
