"""
bindwrap adapter for SQLite via Standard Python library.

- `connect(database, **kwargs)` opens a database and returns a `SqliteWrap`
- `SqliteWrap(conn)` wraps an open `sqlite3.Connection`

Wrapper methods:
- `execute(query, params)` to execute a statement, returns the number of affected rows
- `fetch_all(query, params, *fetch_args)` to fetch records as a list
- `fetch_one(query, params, *fetch_args)` to fetch the first record
- `prepare_bind(query, params)` to get a statement with bound parameters
- `parse_params(query, params)` to see the rewritten query and bind instructions

Query parameters placeholders are `?` for positional and `:name` for named parameters.
Positional parameters are a list or a tuple, every value is bound as a string.
Named parameters are a dict, the keys may carry a type suffix:
- `{"id<i>": 5}` - bind as int; `<s>` - as string (default), `<b>` - as bool
- `{"ids[i]": [5, 15]}` - bind every element as int; `in (:ids)` becomes
  `in (:ids0,:ids1)`

SQLite-specific features:
1. Named parameters are sent as `:name` placeholders, positional as `?`, both are
   native for SQLite.
2. Values of types implementing the `__conform__` protocol are passed to SQLite as is
   when bound as strings.
3. `FetchMode.CLASS` converts `int`, `float`, `str` and `bool` dataclass fields
   from SQLite TEXT and INTEGER values.

Examples:
```
from dataclasses import dataclass

import bindwrap.sqlite3 as bw

@dataclass
class User:
    id: int
    username: str

db = bw.connect("test.sqlite")
db.execute("insert into users(id, username) values(?, ?)", [3, "Romeo"])
db.get_connection().commit()  # Do not forget to commit the data manipulation!!!

users = db.fetch_all(
    "select id, username from users where id in (:ids) order by id",
    {"ids[i]": [1, 2, 3]},
    bw.FetchMode.CLASS,
    User,
)
count = db.fetch_one("select count(*) from users", None, bw.FetchMode.COLUMN)
```
"""  # noqa: E501

from ._sqlite3 import SqliteStatement, SqliteWrap, connect
from bindwrap._common import BindInstruction, BindType, ErrorMode, FetchMode
from bindwrap._common import BindwrapError, MalformedParameterName

__all__ = [
    "SqliteStatement",
    "SqliteWrap",
    "connect",
    "BindInstruction",
    "BindType",
    "ErrorMode",
    "FetchMode",
    "BindwrapError",
    "MalformedParameterName",
]
