"""End-to-end tests for the single-file sorting pipeline."""

from __future__ import annotations

from collections import Counter

import pytest

from gosort.errors import CoverageError, FormatterError, ParseError
from gosort.sorter import SourceSorter
from tests._fixtures.go_tree import go_source

MIXED = go_source(
    """
    // Copyright header.

    // Package demo does things.
    package demo

    import (
    	"fmt"
    	"os"
    )

    // section: helpers

    func helper() {}

    // Exported does work.
    func Exported() {
    	// inside body
    	fmt.Println(os.Args)
    }

    var zeta = 1
    var Alpha = 2 // trailing note

    const (
    	B = iota
    	a
    )

    const Single = "s"

    type server struct{}

    func (s *server) start() {}

    // Run runs.
    func (s server) Run() {}

    func init() {}

    func main() {}

    type Config struct {
    	Name string
    }

    func (c *Config) Validate() error { return nil }

    /* dangling block comment */
    """
)

MIXED_SORTED = go_source(
    """
    // Copyright header.

    // Package demo does things.
    package demo

    import (
    	"fmt"
    	"os"
    )

    // section: helpers

    /* dangling block comment */

    func init() {}

    func main() {}

    const (
    	B = iota
    	a
    )
    const Single = "s"

    var Alpha = 2 // trailing note
    var zeta = 1

    type Config struct {
    	Name string
    }

    func (c *Config) Validate() error { return nil }

    type server struct{}

    // Run runs.
    func (s server) Run() {}

    func (s *server) start() {}

    // Exported does work.
    func Exported() {
    	// inside body
    	fmt.Println(os.Args)
    }

    func helper() {}
    """
)


def _sort(sorter: SourceSorter, text: str) -> str:
    return sorter.sort_source(text.encode("utf-8")).decode("utf-8")


def _non_whitespace(text: str) -> Counter[str]:
    return Counter(char for char in text if not char.isspace())


def test_sort_source_produces_canonical_order(sorter: SourceSorter) -> None:
    assert _sort(sorter, MIXED) == MIXED_SORTED


def test_sort_source_is_idempotent(sorter: SourceSorter) -> None:
    once = _sort(sorter, MIXED)
    assert _sort(sorter, once) == once


def test_sort_source_preserves_every_non_whitespace_byte(sorter: SourceSorter) -> None:
    assert _non_whitespace(_sort(sorter, MIXED)) == _non_whitespace(MIXED)


def test_sort_source_generic_receiver_scenario(sorter: SourceSorter) -> None:
    text = go_source(
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
    )

    assert _sort(sorter, text) == go_source(
        """
        package p

        import "fmt"

        type (
        	b struct{}
        	A[T any] struct{}
        )

        func (a *A[int]) Z() {}

        func (a *A[int]) a() {}

        func AFunc() { fmt.Println("x") }

        func z() {}
        """
    )


def test_sort_source_handles_header_only_file(sorter: SourceSorter) -> None:
    assert _sort(sorter, "// Package p is empty.\npackage p\n\n\n") == "// Package p is empty.\npackage p\n"


def test_sort_source_drops_semicolon_terminators_only(sorter: SourceSorter) -> None:
    output = _sort(sorter, "package p; var b = 2; var a = 1\n")
    assert output == "package p\n\nvar a = 1\nvar b = 2\n"


def test_sort_source_rejects_unparseable_input(sorter: SourceSorter) -> None:
    with pytest.raises(ParseError):
        sorter.sort_source(b"package p\n\nfunc broken( {\n")


def test_sort_source_rejects_top_level_statements(sorter: SourceSorter) -> None:
    with pytest.raises(ParseError):
        sorter.sort_source(b"package p\n\nx := 1\n")


def test_coverage_error_is_a_formatter_error() -> None:
    assert issubclass(CoverageError, FormatterError)


def test_sort_source_keeps_crlf_line_endings(sorter: SourceSorter) -> None:
    source = b"package p\r\n\r\nfunc b() {}\r\n\r\n// doc a\r\nfunc a() {}\r\n"

    output = sorter.sort_source(source)

    assert output == b"package p\r\n\r\n// doc a\r\nfunc a() {}\r\n\r\nfunc b() {}\r\n"
    assert b"\n" not in output.replace(b"\r\n", b"")
