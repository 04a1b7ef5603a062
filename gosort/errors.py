"""Exception hierarchy raised by the sorting pipeline."""

from __future__ import annotations

from pathlib import Path


class GoSortError(RuntimeError):
    """Base class for every error gosort raises on purpose."""


class ConfigError(GoSortError):
    """Raised when the configuration file cannot be parsed."""


class ParseError(GoSortError):
    """Raised when a source file cannot be parsed into top-level declarations."""


class FormatterError(GoSortError):
    """Raised when the formatter rejects the reassembled source."""


class CoverageError(FormatterError):
    """Raised when the emission plan would drop bytes of the original source."""


class FileSortError(GoSortError):
    """Wraps a failure with the path of the file being sorted."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"sort file {self.path} error: {cause}")


__all__ = [
    "ConfigError",
    "CoverageError",
    "FileSortError",
    "FormatterError",
    "GoSortError",
    "ParseError",
]
