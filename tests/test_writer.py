"""Tests for change detection and write-back."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from gosort.sorter import SourceSorter
from gosort.writer import write_result
from tests._fixtures.go_tree import GoTreeBuilder

UNSORTED = """
package p

func b() {}

func a() {}
"""


def test_dry_run_leaves_file_untouched(go_tree: GoTreeBuilder, sorter: SourceSorter) -> None:
    go_tree.write({"x.go": UNSORTED})
    path = go_tree.path("x.go")
    before = path.read_bytes()

    outcome = sorter.sort_file(path, write=False)

    assert outcome.changed is True
    assert outcome.written is False
    assert path.read_bytes() == before
    assert outcome.output == b"package p\n\nfunc a() {}\n\nfunc b() {}\n"


def test_write_mode_replaces_content_and_keeps_permissions(
    go_tree: GoTreeBuilder, sorter: SourceSorter
) -> None:
    go_tree.write({"x.go": UNSORTED})
    path = go_tree.path("x.go")
    os.chmod(path, 0o640)

    outcome = sorter.sort_file(path, write=True)

    assert outcome.written is True
    assert path.read_text(encoding="utf-8") == "package p\n\nfunc a() {}\n\nfunc b() {}\n"
    assert stat.S_IMODE(path.stat().st_mode) == 0o640


def test_second_run_reports_no_change(go_tree: GoTreeBuilder, sorter: SourceSorter) -> None:
    go_tree.write({"x.go": UNSORTED})
    path = go_tree.path("x.go")

    sorter.sort_file(path, write=True)
    outcome = sorter.sort_file(path, write=True)

    assert outcome.changed is False
    assert outcome.written is False


def test_write_result_skips_identical_output(tmp_path: Path) -> None:
    path = tmp_path / "same.go"
    path.write_bytes(b"package p\n")
    mtime = path.stat().st_mtime_ns

    outcome = write_result(path, b"package p\n", b"package p\n", write=True)

    assert outcome.changed is False
    assert outcome.written is False
    assert path.stat().st_mtime_ns == mtime


def test_outcome_diff_renders_unified_diff(tmp_path: Path) -> None:
    path = tmp_path / "x.go"
    outcome = write_result(path, b"package p\nvar b = 1\n", b"package p\nvar a = 1\n", write=False)

    diff = outcome.diff()

    assert diff.startswith("--- a/x.go\n+++ b/x.go\n")
    assert "-var b = 1\n" in diff
    assert "+var a = 1\n" in diff
