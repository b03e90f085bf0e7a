"""Block storage, a write-ahead log, a buffer pool, typed constants, table statistics and an SQL parser."""

__version__ = "0.1.0"

__all__ = [
    "buffer",
    "constant",
    "data",
    "file",
    "lexer",
    "log",
    "parser",
    "pred_parser",
    "stat_info",
]