from __future__ import annotations

from pathlib import Path

import pytest

from gosort.sorter import SourceSorter
from tests._fixtures.go_tree import GoTreeBuilder


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """Provide a reusable Go module builder rooted at the pytest tmp_path."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture
def sorter() -> SourceSorter:
    """Sorter that only re-parses its output, so tests do not need gofmt."""
    return SourceSorter()
