"""
bindwrap adapter for synchronous access to Postgres via psycopg2.

`Psycopg2Wrap(conn)` wraps an open psycopg2 connection. Placeholders are `?` and
`:name` as for any other bindwrap adapter, they are converted to `%s` and `%(name)s`
when executed. Postgres casts like `:id::bigint` keep working: `::` is never taken
for a placeholder.

Example:
```
import psycopg2
import bindwrap.psycopg2 as bw

db = bw.Psycopg2Wrap(psycopg2.connect("dbname=app"), error_mode=bw.ErrorMode.EXCEPTION)
user = db.fetch_one(
    "select id, username from users where id = :id", {"id<i>": 1}, bw.FetchMode.DICT
)
```
"""  # noqa: E501

from ._psycopg2 import Psycopg2Statement, Psycopg2Wrap
from bindwrap._common import BindInstruction, BindType, ErrorMode, FetchMode
from bindwrap._common import BindwrapError, MalformedParameterName

__all__ = [
    "Psycopg2Statement",
    "Psycopg2Wrap",
    "BindInstruction",
    "BindType",
    "ErrorMode",
    "FetchMode",
    "BindwrapError",
    "MalformedParameterName",
]
