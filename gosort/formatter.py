"""Canonical formatting of reassembled Go source."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from .errors import FormatterError, ParseError
from .parsing import GoParser

DEFAULT_COMMAND = ("gofmt",)


class Formatter(ABC):
    """Contract for the final normalization pass over assembled source."""

    @abstractmethod
    def format(self, source: bytes) -> bytes:
        """Return normalized source or raise FormatterError if it does not parse."""


class ReparseFormatter(Formatter):
    """Leaves bytes untouched but refuses output that no longer parses."""

    def __init__(self, parser: Optional[GoParser] = None) -> None:
        self._parser = parser or GoParser()

    def format(self, source: bytes) -> bytes:
        try:
            self._parser.parse(source)
        except ParseError as exc:
            raise FormatterError(f"reassembled source does not parse: {exc}") from exc
        return source


class GofmtFormatter(Formatter):
    """Pipes source through gofmt (or a compatible command reading stdin)."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        runner: Callable[..., bytes] | None = None,
    ) -> None:
        if not command:
            raise ValueError("formatter command must not be empty")
        self.command = list(command)
        self._runner = runner or self._default_runner

    def format(self, source: bytes) -> bytes:
        try:
            return self._runner(self.command, source)
        except FileNotFoundError as exc:
            raise FormatterError(f"formatter executable not found: {self.command[0]}") from exc
        except subprocess.CalledProcessError as exc:
            detail = _decode(exc.stderr) or f"exit status {exc.returncode}"
            raise FormatterError(f"{self.command[0]} rejected reassembled source: {detail}") from exc

    @staticmethod
    def _default_runner(args: Sequence[str], source: bytes) -> bytes:
        completed = subprocess.run(
            list(args),
            input=source,
            check=True,
            capture_output=True,
        )
        return completed.stdout


def _decode(payload: bytes | str | None) -> str:
    if payload is None:
        return ""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    return payload.strip()


__all__ = ["DEFAULT_COMMAND", "Formatter", "GofmtFormatter", "ReparseFormatter"]
