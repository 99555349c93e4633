from typing import Generator
from collections import namedtuple

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import StatementError
from sqlalchemy.orm import declarative_base, Session

import bindwrap.sqlalchemy_sync as bw


meta = sa.MetaData()
Base = declarative_base(metadata=meta)


class Tbl(Base):
    __tablename__ = "tbl"

    id = sa.Column(sa.Integer, primary_key=True)
    name = sa.Column(sa.String)


@pytest.fixture
def engine():
    engine = sa.create_engine("sqlite://")
    with engine.begin() as conn:
        meta.create_all(conn)

    with Session(engine) as session:
        session.add_all([Tbl(id=1, name="Jon"), Tbl(id=2, name="Mary")])
        session.commit()
    return engine


@pytest.fixture
def session(engine: sa.engine.Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def db(session: Session) -> bw.SqlAlchemyWrap:
    return bw.SqlAlchemyWrap(session, error_mode=bw.ErrorMode.WARNING)


def test_prepare_bind(db: bw.SqlAlchemyWrap, session: Session):
    assert db.get_connection() is session
    stmt = db.prepare_bind(
        "SELECT id, name FROM tbl WHERE id IN (:ids) ORDER BY id", {"ids[i]": [1, 2]}
    )
    assert isinstance(stmt, bw.SqlAlchemyStatement)
    assert stmt.query == (
        "SELECT id, name FROM tbl WHERE id IN (:ids0,:ids1) ORDER BY id"
    )
    assert stmt.execute()
    assert stmt.columns() == ("id", "name")
    assert stmt.fetch_column(1) == "Jon"
    assert stmt.fetch(bw.FetchMode.DICT) == {"id": 2, "name": "Mary"}
    assert stmt.fetch() is None
    stmt.close_cursor()


def test_execute(db: bw.SqlAlchemyWrap, session: Session):
    assert (
        db.execute(
            "INSERT INTO tbl (id, name) VALUES (?,?), (?,?)",
            [3, "Romeo", 4, "Juliette"],
        )
        == 2
    )
    assert db.execute("DELETE FROM tbl WHERE id IN (:ids)", {"ids[i]": [3, 4, 5]}) == 2
    session.commit()
    got = db.fetch_all("SELECT id FROM tbl ORDER BY id", None, bw.FetchMode.COLUMN)
    assert got == [1, 2]


def test_fetch_all(db: bw.SqlAlchemyWrap):
    got = db.fetch_all("SELECT id FROM tbl WHERE id <= :m ORDER BY id", {":m<i>": 2})
    assert got == [(1,), (2,)]

    got = db.fetch_all(
        "SELECT id, name FROM tbl WHERE id <= ? ORDER BY id", [2], bw.FetchMode.DICT
    )
    assert got == [{"id": 1, "name": "Jon"}, {"id": 2, "name": "Mary"}]

    Row = namedtuple("Row", "id, name")
    got = db.fetch_all(
        "SELECT id, name FROM tbl WHERE name = :name",
        {"name<s>": "Mary"},
        bw.FetchMode.CLASS,
        Row,
    )
    assert got == [Row(2, "Mary")]


def test_fetch_one(db: bw.SqlAlchemyWrap):
    got = db.fetch_one("SELECT id, name FROM tbl WHERE id = :id", {"id<i>": 2})
    assert got == (2, "Mary")
    assert db.fetch_one("SELECT id FROM tbl WHERE id > :id", {"id<i>": 5}) is None


def test_fail(db: bw.SqlAlchemyWrap, session: Session):
    assert db.fetch_all("SELECT * FROM no_such_table") is None
    session.rollback()

    stmt = db.prepare_bind("SELECT * FROM no_such_table WHERE id = :id", {"id<i>": 1})
    assert not stmt.execute()
    assert isinstance(stmt.error, StatementError)
    session.rollback()

    db = bw.SqlAlchemyWrap(session, error_mode=bw.ErrorMode.EXCEPTION)
    with pytest.raises(StatementError):
        db.execute("UPDATE no_such_table SET x = ?", [1])


def test_connection(engine: sa.engine.Engine):
    with engine.connect() as conn:
        db = bw.SqlAlchemyWrap(conn, fetch_mode=bw.FetchMode.COLUMN)
        assert db.fetch_all("SELECT name FROM tbl ORDER BY id") == ["Jon", "Mary"]

    db = bw.wrap_engine(engine, collect_metrics=False)
    try:
        assert db.fetch_one("SELECT count(*) FROM tbl", None, bw.FetchMode.COLUMN) == 2
    finally:
        db.get_connection().close()


def test_colons_in_literals_and_comments(db: bw.SqlAlchemyWrap):
    got = db.fetch_all("SELECT ':a' AS x, :n AS n", {"n<i>": 1})
    assert got == [(":a", 1)]

    got = db.fetch_one(
        "SELECT ':name' AS x, :name AS y /* :name */ -- :c\n",
        {"name": "Jon"},
        bw.FetchMode.DICT,
    )
    assert got == {"x": ":name", "y": "Jon"}

    got = db.fetch_all(
        "SELECT name FROM tbl WHERE name <> 'x::y' AND id IN (:ids) ORDER BY id",
        {"ids[i]": [1, 2]},
        bw.FetchMode.COLUMN,
    )
    assert got == ["Jon", "Mary"]
