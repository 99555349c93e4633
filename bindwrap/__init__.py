"""
bindwrap: typed parameter binding and array flattening for SQL placeholders

Typical ways to import:
- `import bindwrap.sqlite3 as bw` - for SQLite
- `import bindwrap.psycopg2 as bw` - for synchronous Postgres via psycopg2
- `import bindwrap.pymysql as bw` - for synchronous MySQL/MariaDB via PyMySQL
- `import bindwrap.sqlalchemy_sync as bw` - for synchronous SqlAlchemy
- `from bindwrap import DbApi2Wrap` - for any other DB-API 2.0 driver

Named parameter keys may carry a type suffix: `<i>` (int), `<s>` (string),
`<b>` (bool) for a single value, `[i]`, `[s]`, `[b]` for a collection that is
flattened into one placeholder per element.
"""

from ._common import BindInstruction, BindType, ErrorMode, FetchMode
from ._common import BindwrapError, MalformedParameterName, UnsupportedParamstyle
from ._params import parse_params, to_paramstyle
from ._statement import Statement
from ._wrap import WrapBase
from ._db_api_2 import DbApi2Statement, DbApi2Wrap

__all__ = [
    "BindInstruction",
    "BindType",
    "ErrorMode",
    "FetchMode",
    "BindwrapError",
    "MalformedParameterName",
    "UnsupportedParamstyle",
    "parse_params",
    "to_paramstyle",
    "Statement",
    "WrapBase",
    "DbApi2Statement",
    "DbApi2Wrap",
]
