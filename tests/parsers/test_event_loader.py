"""Tests for the event snapshot loader."""

import json
from pathlib import Path

import pytest

from siphon.errors import EventSourceError, PipelineReport
from siphon.models import BrowserEvent, GitEvent, ShellEvent
from siphon.parsers import load_events, parse_events

RECORDS = [
    {
        "id": "evt-1",
        "timestamp": "2024-03-01T09:00:00",
        "source": "shell",
        "eventType": "command",
        "data": {"command": "kubectl get pods", "exitCode": 0, "durationMs": 420},
    },
    {
        "id": "evt-2",
        "timestamp": "2024-03-01T09:03:00",
        "source": "browser",
        "data": {"url": "https://kubernetes.io/docs", "title": "Docs", "domain": "kubernetes.io"},
    },
    {
        "id": "evt-3",
        "timestamp": "2024-03-01T09:05:00",
        "source": "git",
        "payload": {"action": "commit", "message": "Fix retries", "files_changed": 2},
    },
]


class TestParseEvents:
    def test_valid_records(self) -> None:
        events = parse_events(RECORDS)
        assert [type(e) for e in events] == [ShellEvent, BrowserEvent, GitEvent]
        assert events[2].payload.files_changed == 2

    def test_invalid_records_skipped_and_reported(self) -> None:
        report = PipelineReport()
        bad = {"id": "evt-x", "timestamp": "not a time", "source": "shell", "data": {}}
        events = parse_events([RECORDS[0], bad, "garbage"], report, origin="test")
        assert [e.id for e in events] == ["evt-1"]
        assert report.error_count == 2
        assert {e.error_type for e in report.errors} == {"validation_error"}
        assert report.errors[0].message.startswith("record 1:")
        assert report.errors[0].stage == "load"

    def test_without_report(self) -> None:
        assert parse_events([{"source": "shell"}]) == []


class TestLoadEvents:
    def test_json_array(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(json.dumps(RECORDS))
        assert len(load_events(path)) == 3

    def test_json_object_with_events_key(self, tmp_path: Path) -> None:
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"capturedAt": "2024-03-01", "events": RECORDS}))
        report = PipelineReport()
        events = load_events(path, report)
        assert len(events) == 3
        assert report.items_processed["load"] == 3

    def test_json_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "events.jsonl"
        lines = [json.dumps(r) for r in RECORDS]
        lines.insert(1, "")
        lines.insert(2, "{broken")
        path.write_text("\n".join(lines) + "\n")

        report = PipelineReport()
        events = load_events(path, report)
        assert [e.id for e in events] == ["evt-1", "evt-2", "evt-3"]
        assert report.error_count == 1
        assert report.errors[0].error_type == "json_error"
        assert report.errors[0].message.startswith("line 3:")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(EventSourceError, match="Cannot read events"):
            load_events(tmp_path / "missing.json")

    def test_invalid_json_document(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text("[{")
        with pytest.raises(EventSourceError, match="Invalid JSON"):
            load_events(path)

    def test_json_scalar_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text("42")
        with pytest.raises(EventSourceError, match="expected a list"):
            load_events(path)

    def test_empty_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / "events.jsonl"
        path.write_text("")
        assert load_events(path) == []
