"""Bug parser Protocol — duck-typed, no inheritance required."""
from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from ..models import Bug


@runtime_checkable
class BugParser(Protocol):
    """Protocol for anything that turns serialized text into Bug records."""

    def parse(self, text: str | bytes) -> Bug:
        """Parse a single serialized bug. Raises a BugFilterError on bad input."""
        ...

    def parse_line(self, line: str) -> Bug | None:
        """Parse one line of a stream. Returns None if the line should be skipped."""
        ...

    def parse_file(self, path: str, strict: bool = True) -> Iterator[Bug]:
        """Stream-parse a file line by line."""
        ...

    @property
    def name(self) -> str:
        """Human-readable parser name (e.g. 'json')."""
        ...
