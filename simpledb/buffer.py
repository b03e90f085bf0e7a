"""Buffers hold one block each in memory; the buffer manager pins them to blocks."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable

from simpledb.file import BlockId, FileManager, Page
from simpledb.log import LogManager

INIT_TX_NUM = -1
INIT_LSN = -1
DEFAULT_MAX_WAIT_TIME = 10.0

_logger = logging.getLogger(__name__)


class BufferAbortError(Exception):
    """Raised when no buffer becomes available within the allowed wait time."""


class Buffer:
    """A page in memory together with the block it holds and its pin count."""

    def __init__(self, file_manager: FileManager, log_manager: LogManager, block_size: int) -> None:
        self._fm = file_manager
        self._lm = log_manager
        self._contents = Page(block_size)
        self._block: BlockId | None = None
        self._pins = 0
        self._tx_num = INIT_TX_NUM
        self._lsn = INIT_LSN

    @property
    def contents(self) -> Page:
        """The page held by this buffer."""
        return self._contents

    def write_contents(self, tx_num: int, lsn: int, write: Callable[[Page], None]) -> None:
        """Mark the buffer as modified by ``tx_num`` and let ``write`` change the page."""
        self._tx_num = tx_num
        if lsn > INIT_LSN:
            self._lsn = lsn
        write(self._contents)

    @property
    def block(self) -> BlockId | None:
        """The block assigned to this buffer, or None."""
        return self._block

    @property
    def is_pinned(self) -> bool:
        return self._pins > 0

    @property
    def pins(self) -> int:
        return self._pins

    @property
    def modifying_tx(self) -> int:
        """Number of the transaction that last modified the page, or -1."""
        return self._tx_num

    @property
    def lsn(self) -> int:
        """Sequence number of the latest log record for the modification, or -1."""
        return self._lsn

    def assign_to_block(self, block: BlockId) -> None:
        """Write out any modification, then load ``block`` into the page."""
        self.flush()
        self._fm.read(block, self._contents)
        self._block = block
        self._pins = 0

    def flush(self) -> None:
        """Write a modified page to disk, after the log records it depends on."""
        if self._tx_num == INIT_TX_NUM:
            return
        if self._block is None:
            raise RuntimeError("buffer: modified buffer has no block assigned")
        self._lm.flush(self._lsn)
        self._fm.write(self._block, self._contents)
        self._tx_num = INIT_TX_NUM

    def pin(self) -> None:
        self._pins += 1

    def unpin(self) -> None:
        self._pins -= 1


class BufferManager:
    """Pins buffers from a fixed pool to blocks, waiting when none is free."""

    def __init__(
        self,
        buffers: Iterable[Buffer],
        max_wait_time: float = DEFAULT_MAX_WAIT_TIME,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._pool = list(buffers)
        self._available = len(self._pool)
        self._max_wait_time = max_wait_time
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()

    def pin(self, block: BlockId) -> Buffer:
        """Return a buffer pinned to ``block``.

        Raises BufferAbortError if no buffer could be had in time.
        """
        with self._lock:
            start = self._clock()
            while True:
                buffer = self._try_pin(block)
                if buffer is not None:
                    return buffer
                if self._clock() - start > self._max_wait_time:
                    raise BufferAbortError("buffer: no available buffer")
                self._lock.release()
                try:
                    self._sleep(self._max_wait_time)
                finally:
                    self._lock.acquire()

    def unpin(self, buffer: Buffer) -> None:
        with self._lock:
            buffer.unpin()
            if not buffer.is_pinned:
                self._available += 1

    @property
    def available(self) -> int:
        """Number of buffers that are not pinned."""
        with self._lock:
            return self._available

    def flush_all(self, tx_num: int) -> None:
        """Write every page modified by ``tx_num`` to disk."""
        with self._lock:
            for buffer in self._pool:
                if buffer.modifying_tx == tx_num:
                    buffer.flush()

    def _try_pin(self, block: BlockId) -> Buffer | None:
        buffer = self._find_by_block(block)
        if buffer is None:
            buffer = self._find_unpinned()
            if buffer is None:
                _logger.debug("buffer: no unpinned buffer")
                return None
            try:
                buffer.assign_to_block(block)
            except OSError as exc:
                _logger.warning("buffer: failed to assign block %s: %s", block, exc)
                return None
        if not buffer.is_pinned:
            self._available -= 1
        buffer.pin()
        return buffer

    def _find_by_block(self, block: BlockId) -> Buffer | None:
        return next((b for b in self._pool if b.block == block), None)

    def _find_unpinned(self) -> Buffer | None:
        return next((b for b in self._pool if not b.is_pinned), None)