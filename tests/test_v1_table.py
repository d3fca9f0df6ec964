import gc

import pytest

from msqlite.v1_statement import SQLiteException
from msqlite.v1_storage import SQLiteStorage
from msqlite.v1_table import SQLiteTable


@pytest.fixture
def db():
    storage = SQLiteStorage(":memory:")
    storage.open()
    yield storage
    storage.close()


@pytest.fixture
def table(db):
    tbl = SQLiteTable(db, "t")
    tbl.create_from_sql_string("CREATE TABLE t (a INTEGER, b TEXT)")
    return tbl


def test_create_from_sql_string_creates_table(db):
    tbl = SQLiteTable(db, "sample")
    assert tbl.create_from_sql_string("CREATE TABLE sample (id INTEGER, name TEXT)") is True
    assert db.table_exists("sample")


def test_create_from_sql_string_rejects_invalid_sql(db):
    tbl = SQLiteTable(db, "sample")
    with pytest.raises(SQLiteException):
        tbl.create_from_sql_string("CREATE TABEL sample (id INTEGER)")


def test_create_from_sql_string_rejects_rows(db):
    tbl = SQLiteTable(db, "sample")
    with pytest.raises(SQLiteException):
        tbl.create_from_sql_string("SELECT 1")


def test_storage_returns_attached_db(db):
    tbl = SQLiteTable(db, "t")
    assert tbl.storage() is db


def test_orphaned_table_raises():
    storage = SQLiteStorage(":memory:")
    storage.open()
    tbl = SQLiteTable(storage, "t")
    storage.close()
    del storage
    gc.collect()
    with pytest.raises(RuntimeError):
        tbl.storage()


def test_table_without_storage_raises():
    with pytest.raises(RuntimeError):
        SQLiteTable().storage()


def test_insert_and_read_back(db, table):
    insert = table.new_statement("INSERT INTO t VALUES (?, ?)")
    table.bind_value(insert, 1, 7)
    table.bind_value(insert, 2, "seven")
    assert table.execute(insert) is True
    assert table.get_last_row_id() == db.get_last_row_id()
    assert table.get_last_row_id() == 1

    select = table.new_statement("SELECT a, b FROM t")
    rows = []

    def collect():
        rows.append((table.get_value(select, 0, int), table.get_value(select, 1, str)))
        return True

    select.execute(collect)
    assert rows == [(7, "seven")]


def test_has_data_and_column_count(table):
    insert = table.new_statement("INSERT INTO t VALUES (?, ?)")
    table.bind_value(insert, 1, 3)
    table.bind_value(insert, 2, "three")
    table.execute(insert)

    select = table.new_statement("SELECT a, b FROM t")
    assert table.has_data(select) is True
    assert table.column_count(select) == 2


def test_has_data_false_on_empty_table(table):
    select = table.new_statement("SELECT a FROM t")
    assert table.has_data(select) is False


def test_get_value_type_mismatch(table):
    insert = table.new_statement("INSERT INTO t VALUES (?, ?)")
    table.bind_value(insert, 1, 5)
    table.bind_value(insert, 2, "five")
    table.execute(insert)

    select = table.new_statement("SELECT a, b FROM t")
    assert table.has_data(select)
    with pytest.raises(RuntimeError):
        table.get_value(select, 0, str)
    with pytest.raises(RuntimeError):
        table.get_value(select, 1, int)
    with pytest.raises(TypeError):
        table.get_value(select, 0, float)


def test_bind_value_rejects_unsupported(table):
    insert = table.new_statement("INSERT INTO t VALUES (?, ?)")
    with pytest.raises(TypeError):
        table.bind_value(insert, 1, [1])