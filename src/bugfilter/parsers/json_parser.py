"""JSON bug parser — one flat object per bug, NDJSON for files.

Expected shape::

    {"state": "open", "timestamp": 1493393946, "comment": "Bug via JSON"}
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from ..errors import BugFilterError, MalformedInput, MissingOrInvalidField
from ..models import Bug, State

logger = logging.getLogger(__name__)


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    # bool is an int subclass; a JSON true is not a timestamp
    if value is None or isinstance(value, bool) or not isinstance(value, kind):
        raise MissingOrInvalidField(key)
    return value


def parse_bug(text: str | bytes) -> Bug:
    """Parse a JSON object into a Bug.

    Raises:
        MalformedInput:         bytes are not UTF-8, text is not JSON, or the
                                decoded value is not an object.
        MissingOrInvalidField:  ``comment``, ``state`` or ``timestamp`` is
                                absent or of the wrong type.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"input is not valid UTF-8: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"input is not valid JSON: {exc.msg}") from exc
    except (ValueError, RecursionError) as exc:
        # oversized integer literals and runaway nesting
        raise MalformedInput(f"input is not parseable JSON: {type(exc).__name__}") from exc
    if not isinstance(data, dict):
        raise MalformedInput(f"expected a JSON object, got {type(data).__name__}")

    comment = _require(data, "comment", str)
    state = _require(data, "state", str)
    timestamp = _require(data, "timestamp", int)

    try:
        bug = Bug.from_epoch(State.from_wire(state), timestamp, comment)
    except (OverflowError, OSError, ValueError) as exc:
        raise MissingOrInvalidField(
            "timestamp", f"timestamp out of range: {timestamp}"
        ) from exc
    logger.debug("Parsed bug state=%s timestamp=%d", bug.state.value, timestamp)
    return bug


class JsonBugParser:
    """Parse bugs from JSON text and newline-delimited JSON (NDJSON) files."""

    @property
    def name(self) -> str:
        return "json"

    def parse(self, text: str | bytes) -> Bug:
        return parse_bug(text)

    def parse_line(self, line: str | bytes) -> Bug | None:
        """Parse a single NDJSON line. Returns None for blank lines; errors propagate."""
        line = line.strip()
        if not line:
            return None
        return parse_bug(line)

    def parse_file(self, path: str, strict: bool = True) -> Iterator[Bug]:
        """Stream-parse an NDJSON file. Memory usage: O(1) — one line at a time.

        Lines are read as bytes so UTF-8 problems surface as MalformedInput.
        With ``strict`` the first bad line raises, its message prefixed with
        ``path:lineno``. Otherwise bad lines are logged and skipped.
        """
        with open(path, "rb") as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    bug = self.parse_line(raw)
                except BugFilterError as exc:
                    if strict:
                        exc.args = (f"{path}:{lineno}: {exc}",)
                        raise
                    logger.warning("Skipping line %d of %s: %s", lineno, path, exc)
                    continue
                if bug is not None:
                    yield bug
