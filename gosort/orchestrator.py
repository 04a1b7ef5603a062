"""Batch driver: walks the target path and sorts every Go file found."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .config import FormatterConfig, SortConfig
from .errors import FileSortError, GoSortError
from .formatter import Formatter, GofmtFormatter, ReparseFormatter
from .logging import get_logger
from .sorter import SourceSorter
from .walker import discover_go_files
from .writer import FileOutcome


@dataclass
class BatchResult:
    """Outcome of one gosort invocation."""

    outcomes: List[FileOutcome] = field(default_factory=list)
    errors: List[FileSortError] = field(default_factory=list)

    @property
    def changed(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.changed]

    @property
    def ok(self) -> bool:
        return not self.errors


class Orchestrator:
    """Runs the sorting pipeline over every file selected by the configuration."""

    def __init__(self, sorter: SourceSorter | None = None) -> None:
        self._sorter = sorter
        self.logger = get_logger("orchestrator")

    def run(self, config: SortConfig) -> BatchResult:
        """Sort the files under `config.path`.

        Stops at the first failing file by raising FileSortError, unless
        `config.continue_on_error` is set, in which case failures are
        collected on the returned result and the remaining files still run.
        """
        files = discover_go_files(
            config.path,
            recursive=config.recursive,
            include_tests=config.include_tests,
            exclude_paths=config.exclude_paths,
        )
        self.logger.debug("Discovered %d Go files under %s", len(files), config.path)

        sorter = self._sorter or SourceSorter(formatter=build_formatter(config.formatter))
        result = BatchResult()
        for path in files:
            self.logger.debug("Sorting %s", path)
            try:
                outcome = sorter.sort_file(path, write=config.write)
            except (GoSortError, OSError) as exc:
                error = FileSortError(path, exc)
                if not config.continue_on_error:
                    raise error from exc
                self.logger.error("%s", error)
                result.errors.append(error)
                continue

            result.outcomes.append(outcome)
            if outcome.written:
                self.logger.debug("Wrote %s", path)
            elif outcome.changed:
                self.logger.debug("%s would change (dry-run)", path)

        self.logger.debug(
            "Processed %d files: %d changed, %d failed",
            len(files),
            len(result.changed),
            len(result.errors),
        )
        return result


def build_formatter(config: Optional[FormatterConfig]) -> Formatter:
    if config is not None and config.enabled:
        return GofmtFormatter(config.command)
    return ReparseFormatter()


__all__ = ["BatchResult", "Orchestrator", "build_formatter"]
