"""Block-level storage: block identifiers, in-memory pages and the file manager."""

from __future__ import annotations

import os
import struct
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

INT_SIZE = 4
_BYTES_PER_CHAR = 4
_INT = struct.Struct(">I")


@dataclass(frozen=True)
class BlockId:
    """Identifies a block by its file name and logical block number."""

    filename: str
    number: int

    def __str__(self) -> str:
        return f"[file {self.filename}, block {self.number}]"


class Page:
    """A fixed-size byte area holding the contents of one disk block.

    Integers are stored as 4-byte big-endian unsigned values; byte strings
    and text are stored as a 4-byte length followed by the data.
    """

    def __init__(self, size: int) -> None:
        self._buf = bytearray(size)

    @classmethod
    def from_bytes(cls, data: bytes) -> Page:
        """Create a page whose contents are a copy of ``data``."""
        page = cls(0)
        page._buf = bytearray(data)
        return page

    @property
    def contents(self) -> bytearray:
        """The underlying buffer; its length never changes."""
        return self._buf

    def _check(self, offset: int, size: int) -> None:
        if offset < 0 or offset + size > len(self._buf):
            raise IndexError(
                f"page: range [{offset}, {offset + size}) outside page of size {len(self._buf)}"
            )

    def _copy_in(self, offset: int, data: bytes) -> None:
        # Data that does not fit is cut off; the page never grows.
        if offset < 0 or offset > len(self._buf):
            raise IndexError(f"page: offset {offset} outside page of size {len(self._buf)}")
        end = min(len(self._buf), offset + len(data))
        self._buf[offset:end] = data[: end - offset]

    def get_int(self, offset: int) -> int:
        self._check(offset, INT_SIZE)
        return _INT.unpack_from(self._buf, offset)[0]

    def set_int(self, offset: int, value: int) -> None:
        self._copy_in(offset, _INT.pack(value))

    def get_bytes(self, offset: int) -> bytes:
        length = self.get_int(offset)
        start = offset + INT_SIZE
        self._check(start, length)
        return bytes(self._buf[start : start + length])

    def set_bytes(self, offset: int, value: bytes) -> None:
        self.set_int(offset, len(value))
        self._copy_in(offset + INT_SIZE, bytes(value))

    def get_string(self, offset: int) -> str:
        return self.get_bytes(offset).decode("utf-8", errors="surrogateescape")

    def set_string(self, offset: int, value: str) -> None:
        self.set_bytes(offset, value.encode("utf-8", errors="surrogateescape"))


def max_length(str_len: int) -> int:
    """Bytes needed on a page for a string of ``str_len`` characters."""
    return INT_SIZE + str_len * _BYTES_PER_CHAR


class FileManager:
    """Reads and writes pages to blocks of files inside a database directory."""

    def __init__(self, db_dir: str | os.PathLike[str], block_size: int) -> None:
        self._db_dir = Path(db_dir)
        self._is_new = not self._db_dir.exists()
        if self._is_new:
            self._db_dir.mkdir(parents=True, exist_ok=True)
        self._block_size = block_size
        self._open_files: dict[str, BinaryIO] = {}
        self._lock = threading.Lock()

    @property
    def db_dir(self) -> Path:
        return self._db_dir

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def is_new(self) -> bool:
        """True if the database directory did not exist beforehand."""
        return self._is_new

    def _file(self, filename: str) -> BinaryIO:
        f = self._open_files.get(filename)
        if f is None:
            flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
            fd = os.open(self._db_dir / filename, flags, 0o666)
            f = open(fd, "r+b", buffering=0)
            self._open_files[filename] = f
        return f

    @staticmethod
    def _write_all(f: BinaryIO, data: bytes | bytearray) -> None:
        with memoryview(data) as view:
            pos = 0
            while pos < len(view):
                pos += f.write(view[pos:])

    def read(self, block: BlockId, page: Page) -> None:
        """Fill ``page`` from ``block``; bytes past the end of file are left as they are."""
        with self._lock:
            f = self._file(block.filename)
            f.seek(block.number * self._block_size)
            with memoryview(page.contents) as view:
                pos = 0
                while pos < len(view):
                    n = f.readinto(view[pos:])
                    if not n:
                        break
                    pos += n

    def write(self, block: BlockId, page: Page) -> None:
        """Write the contents of ``page`` to ``block``."""
        with self._lock:
            f = self._file(block.filename)
            f.seek(block.number * self._block_size)
            self._write_all(f, page.contents)

    def append(self, filename: str) -> BlockId:
        """Add a zero-filled block to the end of ``filename`` and return its id."""
        with self._lock:
            f = self._file(filename)
            number = os.fstat(f.fileno()).st_size // self._block_size
            block = BlockId(filename, number)
            f.seek(number * self._block_size)
            self._write_all(f, bytes(self._block_size))
            return block

    def block_count(self, filename: str) -> int:
        """Number of blocks in ``filename``, counting a trailing partial block."""
        with self._lock:
            f = self._file(filename)
            size = os.fstat(f.fileno()).st_size
            return -(-size // self._block_size)

    def close(self) -> None:
        with self._lock:
            for f in self._open_files.values():
                f.close()
            self._open_files.clear()

    def __enter__(self) -> FileManager:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()