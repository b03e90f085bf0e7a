"""Statistics about a table used for plan cost estimates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatInfo:
    """Number of blocks and records in a table.

    The number of distinct values per field is not tracked; it is estimated
    from the record count.
    """

    num_blocks: int
    num_records: int

    def blocks_accessed(self) -> int:
        """Estimated number of blocks in the table."""
        return self.num_blocks

    def records_output(self) -> int:
        """Estimated number of records in the table."""
        return self.num_records

    def distinct_values(self, field: str) -> int:
        """Estimated number of distinct values of ``field``."""
        return 1 + self.num_records // 3