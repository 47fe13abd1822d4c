# minirdb

A small relational database engine built from simple, readable layers:

- **`minirdb.tuple`**: row encoding with a null bitmap (`INT`, `VARCHAR` and `BOOL` columns).
- **`minirdb.page`**: fixed-size slotted pages. Pages are 64 bytes, so page splits are easy to observe.
- **`minirdb.disk`**: `DiskManager`, a page-addressed file. It can be used as a context manager.
- **`minirdb.buffer_pool`**: `BufferPoolManager`, a buffer pool with three frames by default, pin counts and `LruReplacer` replacement.
- **`minirdb.table`**: `Table`, a heap table that appends rows and scans them back.
- **`minirdb.lexer` / `minirdb.parser`**: a tokenizer and a recursive-descent parser for a small SQL subset. The syntax tree types are in `minirdb.ast`.
- **`minirdb.catalog` / `minirdb.analyzer`**: name resolution and type checking against a catalog.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
minirdb
```

This runs a demonstration. It parses and analyzes a set of SQL statements against the built-in `users(id INT NOT NULL, name VARCHAR)` table, and prints the syntax tree and the analyzed form of each.

It then runs statements that fail analysis and prints the error each one reports:

- an unknown table
- an unknown column
- the wrong number of values
- a type mismatch
- NULL in a non-nullable column
- a table that already exists

## Supported SQL

```
SELECT * FROM users
SELECT id, name FROM users WHERE id > 10 AND name = 'Alice'
SELECT id + 1 FROM users
INSERT INTO users VALUES (2, NULL)
CREATE TABLE t (id INT, name VARCHAR)
```

Expressions support the following:

- the logical operators `OR`, `AND` and `NOT`
- the comparisons `=`, `<>`, `<`, `<=`, `>` and `>=`
- the arithmetic operators `+`, `-`, `*` and `/`, and unary minus
- parentheses
- integer and string literals, `TRUE`, `FALSE` and `NULL`

Keywords are case-insensitive. `INTEGER` is accepted as `INT`. A trailing semicolon is optional.

## Using the library

Parsing and analysis:

```python
from minirdb.parser import parse
from minirdb.catalog import Catalog
from minirdb.analyzer import analyze

stmt = parse("SELECT id FROM users WHERE id = 1")
analyzed = analyze(Catalog(), stmt)
```

These calls raise the following errors:

- `parse` raises `ParseError`.
- The tokenizer in `parse` raises `LexError` for an unexpected character or an unterminated string.
- `analyze` raises `AnalysisError`.

`Catalog()` holds only the `users` table. Pass a list of `TableDef` objects to define other tables.

Storage:

```python
from minirdb.disk import DiskManager
from minirdb.buffer_pool import BufferPoolManager
from minirdb.table import Table
from minirdb.tuple import Column, DataType, Schema

schema = Schema([Column("id", DataType.INT), Column("name", DataType.VARCHAR)])
with DiskManager("table.db") as disk:
    table = Table(BufferPoolManager(disk), schema)
    table.insert([1, "Alice"])      # returns (page_id, slot_id)
    table.insert([2, None])         # None is SQL NULL
    table.flush()
    rows = table.scan()             # [[1, "Alice"], [2, None]]
```

Errors and messages from the storage layers:

- A row that does not fit in an empty page raises `PageFullError`.
- Misuse of the buffer pool raises `BufferPoolError`, for example unpinning a page that is not cached or not pinned.
- The buffer pool also raises `BufferPoolError` when every frame is pinned and none can be evicted.
- The buffer pool reports page fetches, allocations and evictions through the `logging` module at INFO level.

## What it does not do

The SQL front end and the storage layers are separate. Nothing executes an analyzed statement:

- `SELECT` does not read rows from a `Table`.
- `INSERT` does not write them.
- `CREATE TABLE` is only checked against the catalog. It does not add a table to it.

The catalog lives in memory and is not stored on disk. Rows are only appended. There is no update, delete, index, transaction or concurrent access.