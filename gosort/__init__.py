"""Canonical reordering of top-level declarations in Go source files."""

from .errors import (
    ConfigError,
    CoverageError,
    FileSortError,
    FormatterError,
    GoSortError,
    ParseError,
)
from .sorter import SourceSorter

__all__ = [
    "ConfigError",
    "CoverageError",
    "FileSortError",
    "FormatterError",
    "GoSortError",
    "ParseError",
    "SourceSorter",
]
