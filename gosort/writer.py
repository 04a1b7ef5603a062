"""Change detection and write-back of sorted files."""

from __future__ import annotations

import difflib
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FileOutcome:
    """Result of sorting one file."""

    path: Path
    changed: bool
    written: bool
    original: bytes = field(default=b"", repr=False)
    output: bytes = field(default=b"", repr=False)

    def diff(self) -> str:
        """Unified diff between the original and sorted content."""
        before = self.original.decode("utf-8", errors="replace").splitlines(keepends=True)
        after = self.output.decode("utf-8", errors="replace").splitlines(keepends=True)
        return "".join(
            difflib.unified_diff(
                before,
                after,
                fromfile=f"a/{self.path.name}",
                tofile=f"b/{self.path.name}",
            )
        )


def write_result(path: Path, original: bytes, output: bytes, *, write: bool) -> FileOutcome:
    """Persist `output` over `path` when writing is enabled and the bytes differ.

    The file keeps its permission bits. Dry-run mode never touches the disk.
    """
    changed = original != output
    written = False
    if write and changed:
        mode = stat.S_IMODE(path.stat().st_mode)
        path.write_bytes(output)
        os.chmod(path, mode)
        written = True
    return FileOutcome(
        path=path,
        changed=changed,
        written=written,
        original=original,
        output=output,
    )


__all__ = ["FileOutcome", "write_result"]
