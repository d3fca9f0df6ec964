# msqlite

A small layer over Python's built-in `sqlite3` module. It gives you a
database storage with explicit transactions, prepared statements with
positional binding, step-wise execution with row callbacks, a table helper
and scoped transactions.

It needs no packages beyond the standard library.

## Installation

```
pip install .
```

## Modules

- `msqlite.v1_storage`: `SQLiteStorage` and the `Flags` enum
- `msqlite.v1_statement`: `SQLiteStatement`, `SQLiteException`, `QueryResult`, `ColumnType`
- `msqlite.v1_table`: `SQLiteTable`
- `msqlite.v1_transaction`: `SQLiteTransaction` and `DestructorAction`
- `msqlite.version`: `version()` and `version_string()`

## Example

```python
from msqlite.v1_storage import SQLiteStorage
from msqlite.v1_statement import SQLiteStatement
from msqlite.v1_transaction import SQLiteTransaction, DestructorAction

db = SQLiteStorage(":memory:")
db.open()

SQLiteStatement(db, "CREATE TABLE sample (id INTEGER PRIMARY KEY, name TEXT)").execute()

insert = SQLiteStatement(db, "INSERT INTO sample VALUES (?, ?)")
insert.bind_all((1, "first"))
insert.execute()

select = SQLiteStatement(db, "SELECT id, name FROM sample")
names = []

def on_row():
    names.append(select.get_string_value(1))
    return True

select.execute(on_row)

with SQLiteTransaction(db, DestructorAction.COMMIT):
    insert.bind_all((2, "second"))
    insert.execute()
```

## Storage

`SQLiteStorage(path)` names a database file (or `":memory:"`). `open()`
connects, creating the file if needed, and applies any flags set earlier with
`set_flag()`; `Flags.ENFORCE_FOREIGN_KEYS` turns on foreign-key enforcement.
`close()` disconnects and `handle()` returns the underlying
`sqlite3.Connection` (or `None` when closed).

Other helpers: `table_exists(name)`, `drop_table(name)` (raises
`SQLiteException` if the table does not exist) and `get_last_row_id()`.

`start_transaction()`, `commit_transaction()` and `abort_transaction()` return
`True` when they act and `False` otherwise: starting while a transaction is
already open, or committing or aborting when none is open, does nothing.

## Statements

`SQLiteStatement(db, sql)` attaches to a storage and prepares the SQL; invalid
SQL raises `SQLiteException`. `attach(db, sql)` and `prepare(sql)` re-target an
existing statement.

- `bind(idx, value)` binds `int`, `float`, `str`, `bytes` or `None` to a
  1-based parameter; an index out of range raises `SQLiteException`, any other
  type raises `TypeError`. `bind_all(values)` binds parameters 1..n in order.
- `execute_step(func=None)` advances one row and returns a `QueryResult`:
  `COMPLETED` when there are no more rows, otherwise `ONGOING` or `ABORTED`
  depending on whether `func()` returned a true value.
- `execute(func=None)` runs to the end and returns `True`, or `False` if the
  callback stopped early. Afterwards the statement is reset and its bindings
  cleared, so it can be bound and run again; on error it is reset and the
  `SQLiteException` is raised.
- While a row is current: `get_long_value`, `get_ulong_value`, `get_int_value`,
  `get_double_value`, `get_string_value`, `column_type` (a `ColumnType`;
  `RuntimeError` for NULL), `is_null` and `column_count`. NULL values read as
  `0`, `0.0` or `""`.

## Tables

`SQLiteTable(db, name)` ties a storage and a table name together without
keeping the storage alive; `storage()` raises `RuntimeError` once the storage
is gone. It offers `create_from_sql_string(query)`, `new_statement(query)`,
`bind_value(stmt, idx, value)`, `get_value(stmt, idx, expected_type)` (checks
the column is INTEGER for `int` or TEXT for `str`, else `RuntimeError`),
`execute(stmt)`, `has_data(stmt)`, `column_count(stmt)` and
`get_last_row_id()`.

## Transactions

`SQLiteTransaction(db, action=DestructorAction.ABORT)` starts a transaction on
the storage. `commit()` and `abort()` end it. `close()`, leaving a `with`
block, or the object being collected applies the configured action if the
transaction is still pending. If a transaction was already open on the
storage, the new one starts nothing and its `commit()` and `abort()` do
nothing.

## What it does not do

There is no command-line tool and no SQL builder: statements are written as
SQL text, and tables are created by running `CREATE TABLE` statements.

## Version

```python
from msqlite.version import version, version_string

version_string()   # "1.99.8.0"
version()          # major, minor, patch and tweak packed into one integer
```

## Running the tests

```
pip install .[test]
pytest
```