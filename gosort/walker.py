"""Discovery of Go source files to sort."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "vendor",
    "third_party",
}

SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"


def discover_go_files(
    path: Path | str,
    *,
    recursive: bool = True,
    include_tests: bool = False,
    exclude_paths: Sequence[str] = (),
) -> List[Path]:
    """Return absolute paths of the Go files to sort under `path`, in sorted order.

    `exclude_paths` are shell patterns matched against the slash-separated path
    relative to `path` and against the bare file or directory name, so both
    `internal/gen` and `*.pb.go` work. A trailing `/` is ignored. An excluded
    directory is not descended into.
    """
    target = Path(path).expanduser()
    if not target.exists():
        raise FileNotFoundError(f"file/dir {path} not found")
    target = target.resolve()

    if target.is_file():
        return [target] if is_candidate(target.name, include_tests) else []

    patterns = normalize_excludes(exclude_paths)
    files = [
        file
        for file in _iter_files(target, patterns, recursive=recursive)
        if is_candidate(file.name, include_tests)
    ]
    return sorted(files)


def is_candidate(filename: str, include_tests: bool) -> bool:
    if not filename.endswith(SOURCE_SUFFIX):
        return False
    if not include_tests and filename.endswith(TEST_SUFFIX):
        return False
    return True


def normalize_excludes(patterns: Sequence[str]) -> List[str]:
    cleaned = (pattern.strip().strip("/") for pattern in patterns)
    return [pattern for pattern in cleaned if pattern]


def is_excluded(rel_path: str, patterns: Sequence[str]) -> bool:
    name = rel_path.rsplit("/", 1)[-1]
    return any(fnmatchcase(rel_path, p) or fnmatchcase(name, p) for p in patterns)


def _iter_files(root: Path, patterns: Sequence[str], *, recursive: bool) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        def rel(name: str) -> str:
            return f"{rel_dir}/{name}" if rel_dir else name

        if recursive:
            dirnames[:] = [
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS and not is_excluded(rel(name), patterns)
            ]
        else:
            dirnames[:] = []

        for filename in filenames:
            if not is_excluded(rel(filename), patterns):
                yield current_dir / filename


__all__ = [
    "SOURCE_SUFFIX",
    "TEST_SUFFIX",
    "discover_go_files",
    "is_candidate",
    "is_excluded",
    "normalize_excludes",
]
