"""
bindwrap adapter for synchronous SQLAlchemy.

`SqlAlchemyWrap(session)` wraps a `Session` or a `Connection`; `wrap_engine(engine)`
opens a new `Session` and wraps it. Queries are plain SQL text with `?` or `:name`
placeholders and typed parameter names, exactly as for the DB-API adapters.

Example:
```
import sqlalchemy as sa
from sqlalchemy.orm import Session
import bindwrap.sqlalchemy_sync as bw

engine = sa.create_engine("sqlite:///test.sqlite")
with Session(engine) as session:
    db = bw.SqlAlchemyWrap(session)
    db.execute("insert into users(id, username) values(:id, :name)", {
        "id<i>": 3, "name": "Romeo"
    })
    session.commit()
    usernames = db.fetch_all(
        "select username from users where id in (:ids)",
        {"ids[i]": [1, 2, 3]},
        bw.FetchMode.COLUMN,
    )
```
"""

from ._sqlalchemy_sync import SqlAlchemyStatement, SqlAlchemyWrap, wrap_engine
from bindwrap._common import BindInstruction, BindType, ErrorMode, FetchMode
from bindwrap._common import BindwrapError, MalformedParameterName

__all__ = [
    "SqlAlchemyStatement",
    "SqlAlchemyWrap",
    "wrap_engine",
    "BindInstruction",
    "BindType",
    "ErrorMode",
    "FetchMode",
    "BindwrapError",
    "MalformedParameterName",
]
