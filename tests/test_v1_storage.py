import pytest

from msqlite.v1_statement import SQLiteException, SQLiteStatement
from msqlite.v1_storage import Flags, SQLiteStorage


@pytest.fixture
def db():
    storage = SQLiteStorage(":memory:")
    storage.open()
    yield storage
    storage.close()


def test_creation(db):
    assert db.table_exists("do-not-exists") is False
    with pytest.raises(SQLiteException):
        db.drop_table("sample")
    SQLiteStatement(db, "CREATE TABLE sample (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT)").execute()
    assert db.table_exists("sample") is True
    assert db.drop_table("sample") is True
    assert db.table_exists("sample") is False


def test_lock_after_close(tmp_path):
    path = tmp_path / "lockissue.db"
    db1 = SQLiteStorage(path)
    db1.open()
    SQLiteStatement(db1, "CREATE TABLE mytable (id INTEGER, name TEXT)").execute()
    ins = SQLiteStatement(db1, "INSERT INTO mytable VALUES (?, ?)")
    ins.bind_all((1, "aaa"))
    ins.execute()
    sel = SQLiteStatement(db1, "SELECT id FROM mytable")
    sel.execute()
    assert db1.close()

    db2 = SQLiteStorage(path)
    db2.open()
    assert db2.table_exists("mytable")
    assert db2.drop_table("mytable")
    assert db2.close()


def test_last_row_id(db):
    SQLiteStatement(db, "CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)").execute()
    ins = SQLiteStatement(db, "INSERT INTO t (v) VALUES (?)")
    ins.bind(1, "a")
    ins.execute()
    ins.bind(1, "b")
    ins.execute()
    assert db.get_last_row_id() == 2


def test_transaction_flags(db):
    assert db.start_transaction() is True
    assert db.start_transaction() is False
    assert db.commit_transaction() is True
    assert db.commit_transaction() is False
    assert db.abort_transaction() is False


def test_enforce_foreign_keys():
    db = SQLiteStorage(":memory:")
    db.set_flag(Flags.ENFORCE_FOREIGN_KEYS)
    db.open()
    SQLiteStatement(db, "CREATE TABLE First (id INTEGER UNIQUE, ref INTEGER)").execute()
    SQLiteStatement(
        db,
        "CREATE TABLE Second (sid INTEGER UNIQUE, name TEXT, fid INTEGER,"
        " CONSTRAINT fk FOREIGN KEY(fid) REFERENCES First(id) ON DELETE CASCADE ON UPDATE CASCADE)",
    ).execute()
    f = SQLiteStatement(db, "INSERT INTO First VALUES (?, ?)")
    f.bind_all((1, 1))
    assert f.execute()
    s = SQLiteStatement(db, "INSERT INTO Second VALUES (?, ?, ?)")
    s.bind_all((1, "One", 1))
    assert s.execute()
    s.bind_all((2, "Two", 12983))
    with pytest.raises(SQLiteException):
        s.execute()
    s.bind_all((3, "Three", 1))
    assert s.execute()