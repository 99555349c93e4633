"""
bindwrap adapter for synchronous access to MySQL/MariaDB via PyMySQL.

`PyMySQLWrap(conn)` wraps an open PyMySQL connection. Write queries with `?` or
`:name` placeholders like for any other bindwrap adapter, they are converted to
`%s` and `%(name)s` when executed. Literal `%` characters are escaped automatically
when the query has parameters.

Example:
```
import pymysql
import bindwrap.pymysql as bw

db = bw.PyMySQLWrap(pymysql.connect(host="localhost", user="app", database="app"))
rows = db.fetch_all(
    "select id, name from tbl where id in (:ids) and name like :name",
    {"ids[i]": [1, 2], "name": "J%"},
    bw.FetchMode.DICT,
)
affected = db.execute("delete from tbl where id = :id", {"id<i>": 3})
db.get_connection().commit()
```
"""

from ._pymysql import PyMySQLStatement, PyMySQLWrap
from bindwrap._common import BindInstruction, BindType, ErrorMode, FetchMode
from bindwrap._common import BindwrapError, MalformedParameterName

__all__ = [
    "PyMySQLStatement",
    "PyMySQLWrap",
    "BindInstruction",
    "BindType",
    "ErrorMode",
    "FetchMode",
    "BindwrapError",
    "MalformedParameterName",
]
