"""Write-ahead log: records are packed into blocks from right to left.

Each log block starts with a 4-byte offset of the most recently written
record; records follow as length-prefixed byte strings towards the end
of the block, newest first.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from simpledb.file import INT_SIZE, BlockId, FileManager, Page

OFFSET_SIZE = 4


class LogIterator:
    """Walks log records from the newest to the oldest."""

    def __init__(self, file_manager: FileManager, block: BlockId) -> None:
        self._fm = file_manager
        self._page = Page(file_manager.block_size)
        self._block = block
        self._offset = 0
        self._move_to(block)

    @property
    def block(self) -> BlockId:
        """The block currently being read."""
        return self._block

    @property
    def offset(self) -> int:
        """Offset in the current block of the next record."""
        return self._offset

    def _move_to(self, block: BlockId) -> None:
        self._fm.read(block, self._page)
        self._offset = self._page.get_int(0)

    def has_next(self) -> bool:
        return self._offset < self._fm.block_size or self._block.number > 0

    def __iter__(self) -> LogIterator:
        return self

    def __next__(self) -> bytes:
        if not self.has_next():
            raise StopIteration
        if self._offset == self._fm.block_size:
            self._block = BlockId(self._block.filename, self._block.number - 1)
            self._move_to(self._block)
        record = self._page.get_bytes(self._offset)
        self._offset += INT_SIZE + len(record)
        return record


class LogManager:
    """Appends records to the log file and flushes them on demand."""

    def __init__(self, file_manager: FileManager, filename: str) -> None:
        self._fm = file_manager
        self._filename = filename
        self._page = Page(file_manager.block_size)
        self._latest_lsn = 0
        self._last_saved_lsn = 0
        self._lock = threading.Lock()
        count = file_manager.block_count(filename)
        if count == 0:
            self._current_block = self._append_new_block()
        else:
            self._current_block = BlockId(filename, count - 1)
            file_manager.read(self._current_block, self._page)

    @property
    def current_block(self) -> BlockId:
        return self._current_block

    @property
    def latest_lsn(self) -> int:
        """Sequence number of the most recently appended record."""
        return self._latest_lsn

    @property
    def last_saved_lsn(self) -> int:
        """Sequence number of the latest record known to be on disk."""
        return self._last_saved_lsn

    @property
    def _last_offset(self) -> int:
        return self._page.get_int(0)

    def append(self, record: bytes) -> int:
        """Add ``record`` to the log and return its log sequence number."""
        record = bytes(record)
        needed = len(record) + OFFSET_SIZE
        if needed > self._fm.block_size:
            raise ValueError(
                f"log: record of {len(record)} bytes does not fit in a block of {self._fm.block_size}"
            )
        with self._lock:
            if self._last_offset < OFFSET_SIZE + needed:
                self._flush()
                self._current_block = self._append_new_block()
            offset = self._last_offset - needed
            self._page.set_bytes(offset, record)
            self._page.set_int(0, offset)
            self._latest_lsn += 1
            return self._latest_lsn

    def flush(self, lsn: int) -> None:
        """Make sure the record with sequence number ``lsn`` is on disk."""
        with self._lock:
            if lsn < self._last_saved_lsn:
                return
            self._flush()

    def iterator(self) -> LogIterator:
        """Flush the log and return an iterator over its records, newest first."""
        with self._lock:
            self._flush()
            return LogIterator(self._fm, self._current_block)

    def __iter__(self) -> Iterator[bytes]:
        return self.iterator()

    def _flush(self) -> None:
        self._fm.write(self._current_block, self._page)
        self._last_saved_lsn = self._latest_lsn

    def _append_new_block(self) -> BlockId:
        block = self._fm.append(self._filename)
        self._fm.write(block, self._page)
        self._page.set_int(0, self._fm.block_size)
        return block