"""Typed failures raised by the parser and the query engine."""
from __future__ import annotations


class BugFilterError(Exception):
    """Base class for every error bugfilter raises on purpose."""


class MalformedInput(BugFilterError, ValueError):
    """Input is not UTF-8, not valid JSON, or not a JSON object."""


class MissingOrInvalidField(BugFilterError, ValueError):
    """A required key is absent or holds a value of the wrong type."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"missing or invalid field: {field!r}")


class InvalidQuery(BugFilterError, ValueError):
    """A query was issued without a usable state or time range."""
