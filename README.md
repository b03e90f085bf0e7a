# simpledb

The lower layers and the SQL front end of a small relational database
engine. It is pure Python and needs nothing outside the standard library.

## Modules

- `simpledb.file` provides `BlockId`, `Page`, `FileManager` and
  `max_length`.
  - `FileManager` reads and writes fixed-size blocks of files inside a
    database directory. Its `is_new` property tells whether that directory had
    to be created. `FileManager` is a context manager, and `close()` closes
    the open files.
  - A `Page` stores big-endian unsigned 32-bit integers (`get_int` /
    `set_int`). It also stores length-prefixed byte strings (`get_bytes` /
    `set_bytes`) and text (`get_string` / `set_string`).
- `simpledb.log` provides `LogManager` and `LogIterator`.
  - The log is append-only. Each block is filled from right to left.
  - `append()` returns a log sequence number. `flush(lsn)` makes sure that
    record is on disk.
  - Iterating a `LogManager` flushes it first, then yields the records from
    newest to oldest.
- `simpledb.buffer` provides `Buffer`, `BufferManager` and
  `BufferAbortError`.
  - `BufferManager` is a fixed pool of buffers. `pin()` pins a buffer to a
    block. If no buffer is free, it waits up to `max_wait_time` seconds and
    then raises `BufferAbortError`.
  - A modified buffer is written to disk only after the log records it
    depends on have been flushed.
- `simpledb.constant` provides `Kind` and `Constant`, which are typed integer
  or string values.
- `simpledb.stat_info` provides `StatInfo`, which holds block and record
  counts for cost estimates. The number of distinct values is estimated as
  `1 + records // 3`.
- `simpledb.lexer`, `simpledb.pred_parser`, `simpledb.data` and
  `simpledb.parser` form a tokenizer and a recursive-descent parser for a
  small SQL dialect.
  - The dialect covers `select`, `insert`, `delete`, `update`,
    `create table`, `create view` and `create index`.
  - Predicates are equalities joined by `and`.
  - Words are case-insensitive.
  - String constants are written in single quotes and cannot contain spaces.
  - Syntax errors raise `simpledb.lexer.BadSyntaxError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Block storage, the log and the buffer pool:

```python
from simpledb.buffer import Buffer, BufferManager
from simpledb.file import FileManager, Page
from simpledb.log import LogManager

with FileManager("dbdir", 400) as fm:
    page = Page(fm.block_size)
    page.set_string(0, "hello")
    block = fm.append("data")
    fm.write(block, page)

    lm = LogManager(fm, "logfile")
    lsn = lm.append(b"first record")
    lm.flush(lsn)
    for record in lm:
        print(record)

    bm = BufferManager([Buffer(fm, lm, fm.block_size) for _ in range(3)],
                       max_wait_time=0)
    buf = bm.pin(block)
    print(buf.contents.get_string(0))          # hello
    buf.write_contents(1, lsn, lambda p: p.set_int(100, 42))
    bm.flush_all(1)                            # writes the page of transaction 1
    bm.unpin(buf)
    print(bm.available)                        # 3
```

Parsing SQL:

```python
from simpledb.parser import Parser

data = Parser("select foo, bar from tests where foo=1").query()
print(data.fields, data.tables)   # ['foo', 'bar'] ['tests']
print(data)                       # select foo, bar from tests where foo=1

cmd = Parser("insert into tests(foo, bar) values(1, 'x')").update_cmd()
print(type(cmd).__name__, cmd)    # InsertData insert into tests(foo, bar) values(1, x)
```

## What the package does not do

The package parses SQL but does not run it. It has no record or table
storage, no catalog of tables, views or indexes, no query planner or scans,
and no transactions or crash recovery. The log and buffer pool can be used
directly, but nothing here turns a parsed statement into reads or writes.
There is no command-line tool and no server.