"""Tests for the formatter stage."""

from __future__ import annotations

import shutil
import subprocess

import pytest

from gosort.errors import FormatterError
from gosort.formatter import GofmtFormatter, ReparseFormatter
from gosort.sorter import SourceSorter
from tests._fixtures.go_tree import go_source


def test_gofmt_formatter_pipes_source_through_runner() -> None:
    calls: list[tuple[list[str], bytes]] = []

    def runner(args, source):  # type: ignore[no-untyped-def]
        calls.append((list(args), source))
        return source.replace(b"    ", b"\t")

    formatter = GofmtFormatter(["gofmt", "-s"], runner=runner)
    result = formatter.format(b"package p\n\nfunc f() {\n    return\n}\n")

    assert result == b"package p\n\nfunc f() {\n\treturn\n}\n"
    assert calls == [(["gofmt", "-s"], b"package p\n\nfunc f() {\n    return\n}\n")]


def test_gofmt_formatter_wraps_process_failures() -> None:
    def runner(args, source):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(2, list(args), output=b"", stderr=b"<standard input>:3:1: expected '}'")

    with pytest.raises(FormatterError, match="expected '}'"):
        GofmtFormatter(runner=runner).format(b"package p\n")


def test_gofmt_formatter_reports_missing_executable() -> None:
    def runner(args, source):  # type: ignore[no-untyped-def]
        raise FileNotFoundError(args[0])

    with pytest.raises(FormatterError, match="not found: gofmt"):
        GofmtFormatter(runner=runner).format(b"package p\n")


def test_gofmt_formatter_requires_a_command() -> None:
    with pytest.raises(ValueError):
        GofmtFormatter([])


def test_reparse_formatter_returns_input_unchanged() -> None:
    source = b"package p\n\nfunc f() {}\n"
    assert ReparseFormatter().format(source) == source


def test_reparse_formatter_rejects_broken_output() -> None:
    with pytest.raises(FormatterError, match="does not parse"):
        ReparseFormatter().format(b"package p\n\nfunc f() {\n")


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_sorting_with_gofmt_is_idempotent() -> None:
    sorter = SourceSorter(formatter=GofmtFormatter())
    source = go_source(
        """
        package p

        import "fmt"

        type (
        	b struct{}
        	A[T any] struct{}
        )

        func (a *A[int]) Z() {}
        func (a *A[int]) a() {}

        func z() {}
        func AFunc() { fmt.Println("x") }
        """
    ).encode("utf-8")

    once = sorter.sort_source(source)
    text = once.decode("utf-8")
    assert text.index("func (a *A[int]) Z()") < text.index("func (a *A[int]) a()")
    assert text.index("func (a *A[int]) a()") < text.index("func AFunc()")
    assert text.index("func AFunc()") < text.index("func z()")
    assert sorter.sort_source(once) == once
