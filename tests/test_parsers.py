"""Tests for the JSON bug parser."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from bugfilter.errors import BugFilterError, MalformedInput, MissingOrInvalidField
from bugfilter.models import State
from bugfilter.parsers.base import BugParser
from bugfilter.parsers.json_parser import JsonBugParser, parse_bug

VALID = {"state": "open", "timestamp": 1493393946, "comment": "Bug via JSON"}


# ---------------------------------------------------------------------------
# parse_bug
# ---------------------------------------------------------------------------

class TestParseBug:
    def test_bug_via_json(self) -> None:
        bug = parse_bug('{"state": "open","timestamp": 1493393946,"comment": "Bug via JSON"}')
        assert bug.comment == "Bug via JSON"
        assert bug.state is State.OPEN
        assert bug.timestamp == datetime.fromtimestamp(1493393946, tz=timezone.utc)

    @pytest.mark.parametrize("payload", [
        {"state": "open", "timestamp": 0, "comment": ""},
        {"state": "closed", "timestamp": 1754049600, "comment": "crash on save\nsee log"},
        {"state": "closed", "timestamp": 1493393946, "comment": "ünïcode ✓"},
    ])
    def test_reserializes_to_same_fields(self, payload: dict) -> None:
        assert parse_bug(json.dumps(payload)).to_dict() == payload

    def test_accepts_utf8_bytes(self) -> None:
        raw = json.dumps({**VALID, "comment": "ünïcode"}, ensure_ascii=False).encode("utf-8")
        assert parse_bug(raw).comment == "ünïcode"

    @pytest.mark.parametrize("state", ["Open", "OPEN", "pending", ""])
    def test_unknown_state_is_closed(self, state: str) -> None:
        assert parse_bug(json.dumps({**VALID, "state": state})).state is State.CLOSED

    def test_extra_keys_are_ignored(self) -> None:
        bug = parse_bug(json.dumps({**VALID, "priority": "high"}))
        assert bug.comment == "Bug via JSON"

    @pytest.mark.parametrize("key", ["state", "timestamp", "comment"])
    def test_missing_key(self, key: str) -> None:
        payload = {k: v for k, v in VALID.items() if k != key}
        with pytest.raises(MissingOrInvalidField) as excinfo:
            parse_bug(json.dumps(payload))
        assert excinfo.value.field == key

    @pytest.mark.parametrize("key,value", [
        ("comment", 42),
        ("comment", None),
        ("state", True),
        ("state", ["open"]),
        ("timestamp", "1493393946"),
        ("timestamp", 1493393946.5),
        ("timestamp", True),
        ("timestamp", None),
    ])
    def test_wrong_type(self, key: str, value: object) -> None:
        with pytest.raises(MissingOrInvalidField) as excinfo:
            parse_bug(json.dumps({**VALID, key: value}))
        assert excinfo.value.field == key

    def test_out_of_range_timestamp(self) -> None:
        with pytest.raises(MissingOrInvalidField):
            parse_bug(json.dumps({**VALID, "timestamp": 10 ** 20}))

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        '{"state": "open",',
        "[1, 2, 3]",
        '"just a string"',
        "null",
        pytest.param("[" * 100_000, id="deep-nesting"),
        pytest.param('{"state": "open", "comment": "x", "timestamp": ' + "1" * 5000 + "}", id="oversized-integer"),
    ])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedInput):
            parse_bug(text)

    def test_invalid_utf8(self) -> None:
        with pytest.raises(MalformedInput) as excinfo:
            parse_bug(b'{"comment": "\xff\xfe"}')
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_bug("nope")
        assert issubclass(MissingOrInvalidField, BugFilterError)


# ---------------------------------------------------------------------------
# JsonBugParser
# ---------------------------------------------------------------------------

class TestJsonBugParser:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(JsonBugParser(), BugParser)
        assert JsonBugParser().name == "json"

    def test_parse_delegates(self) -> None:
        assert JsonBugParser().parse(json.dumps(VALID)).state is State.OPEN

    def test_blank_line_returns_none(self) -> None:
        p = JsonBugParser()
        assert p.parse_line("") is None
        assert p.parse_line("   \n") is None

    def test_bad_line_raises(self) -> None:
        with pytest.raises(MalformedInput):
            JsonBugParser().parse_line("not json")

    def test_parse_file_preserves_order(self, tmp_bug_file, scenario_lines) -> None:
        path = tmp_bug_file(scenario_lines)
        bugs = list(JsonBugParser().parse_file(str(path)))
        assert [b.comment for b in bugs] == ["Bug 1", "Bug 2", "Bug 2"]
        assert [b.state for b in bugs] == [State.OPEN, State.OPEN, State.CLOSED]

    def test_parse_file_skips_blank_lines(self, tmp_bug_file) -> None:
        path = tmp_bug_file([json.dumps(VALID), "", json.dumps(VALID)])
        assert len(list(JsonBugParser().parse_file(str(path)))) == 2

    def test_parse_file_strict_reports_line(self, tmp_bug_file) -> None:
        path = tmp_bug_file([json.dumps(VALID), '{"state": "open"}'])
        with pytest.raises(MissingOrInvalidField) as excinfo:
            list(JsonBugParser().parse_file(str(path)))
        assert f"{path}:2:" in str(excinfo.value)

    def test_parse_file_lenient_skips(self, tmp_bug_file, caplog) -> None:
        path = tmp_bug_file(["garbage", json.dumps(VALID), "[]"])
        with caplog.at_level(logging.WARNING, logger="bugfilter.parsers.json_parser"):
            bugs = list(JsonBugParser().parse_file(str(path), strict=False))
        assert len(bugs) == 1
        assert "Skipping line 1" in caplog.text
        assert "Skipping line 3" in caplog.text

    def test_parse_file_lenient_skips_unparseable_numbers(self, tmp_bug_file) -> None:
        huge = '{"state": "open", "comment": "x", "timestamp": ' + "1" * 5000 + "}"
        path = tmp_bug_file([huge, json.dumps(VALID)])
        bugs = list(JsonBugParser().parse_file(str(path), strict=False))
        assert [b.comment for b in bugs] == ["Bug via JSON"]

    def test_parse_file_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.ndjson"
        path.write_bytes(b'{"state": "open", "timestamp": 1, "comment": "\xff"}\n')
        with pytest.raises(MalformedInput):
            list(JsonBugParser().parse_file(str(path)))

    def test_parse_file_empty(self, tmp_bug_file) -> None:
        path = tmp_bug_file([])
        assert list(JsonBugParser().parse_file(str(path))) == []
