"""Shared pytest fixtures for bugfilter tests."""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from bugfilter.models import Bug, State


@pytest.fixture()
def now() -> datetime:
    """A fixed reference instant at noon UTC, far from any day boundary."""
    return datetime(2025, 8, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def scenario_bugs(now: datetime) -> list[Bug]:
    return [
        Bug(State.OPEN, now, "Bug 1"),
        Bug(State.OPEN, now - timedelta(hours=26), "Bug 2"),
        Bug(State.CLOSED, now - timedelta(days=14), "Bug 2"),
    ]


@pytest.fixture()
def tmp_bug_file(tmp_path: Path):
    """Return a factory that writes NDJSON bug files."""

    def _make(lines: list[str], name: str = "bugs.ndjson") -> Path:
        p = tmp_path / name
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p

    return _make


@pytest.fixture()
def scenario_lines(scenario_bugs: list[Bug]) -> list[str]:
    return [json.dumps(b.to_dict()) for b in scenario_bugs]
