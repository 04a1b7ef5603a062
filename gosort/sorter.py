"""Single-file sorting pipeline: parse, classify, place comments, order, emit."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .classifier import classify
from .comments import place_comments
from .emitter import Emitter
from .formatter import Formatter
from .logging import get_logger
from .orderer import order
from .parsing import GoParser
from .writer import FileOutcome, write_result


class SourceSorter:
    """Rewrites Go source so top-level declarations appear in canonical order."""

    def __init__(
        self,
        parser: Optional[GoParser] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        self.parser = parser or GoParser()
        self.emitter = Emitter(formatter)
        self.logger = get_logger("sorter")

    def sort_source(self, source: bytes) -> bytes:
        """Return the reordered and formatted bytes for `source`."""
        tree = self.parser.parse(source)
        layout = place_comments(classify(tree, source))
        self.logger.debug(
            "Classified %d declarations and %d comments",
            len(layout.declarations),
            len(layout.comments),
        )
        return self.emitter.emit(layout, order(layout))

    def sort_file(self, path: Path, *, write: bool) -> FileOutcome:
        """Sort one file on disk; nothing is written unless `write` is set."""
        original = path.read_bytes()
        output = self.sort_source(original)
        return write_result(path, original, output, write=write)


__all__ = ["SourceSorter"]
