"""Tests for siphon.errors: PipelineError, PipelineReport, report persistence."""

from datetime import timedelta
from pathlib import Path

from siphon.errors import (
    REPORT_FILENAME,
    EventSourceError,
    PipelineError,
    PipelineReport,
    SiphonError,
    UnknownTemplateError,
    load_report,
    save_report,
)


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(EventSourceError, SiphonError)
        assert issubclass(UnknownTemplateError, SiphonError)


class TestPipelineError:
    def test_basic_error(self) -> None:
        err = PipelineError(stage="load", message="bad record")
        assert err.stage == "load"
        assert err.error_type == "unknown"


class TestPipelineReport:
    def test_empty_report(self) -> None:
        report = PipelineReport()
        assert report.error_count == 0
        assert report.finished_at is None

    def test_add_error(self) -> None:
        report = PipelineReport()
        report.add_error("load", "line 3: bad json", source="events.jsonl", error_type="json_error")
        assert report.error_count == 1
        assert report.errors[0].source == "events.jsonl"

    def test_mark_stage_complete(self) -> None:
        report = PipelineReport()
        report.mark_stage_complete("cluster", 3)
        report.mark_stage_complete("cluster", 4)  # duplicate stage, count updated
        assert report.stages_completed == ["cluster"]
        assert report.items_processed == {"cluster": 4}

    def test_mark_stage_without_items(self) -> None:
        report = PipelineReport()
        report.mark_stage_complete("sort")
        assert report.items_processed == {}

    def test_overwrites(self, tmp_path: Path) -> None:
        report = PipelineReport()
        target = tmp_path / "siphon-2024-03-01.md"
        report.outputs_written.append(str(target))
        assert report.overwrites(target)
        assert not report.overwrites(tmp_path / "other.md")

    def test_summary_text(self) -> None:
        report = PipelineReport()
        report.mark_stage_complete("load", 12)
        report.mark_stage_complete("sort")
        report.mark_stage_complete("cluster", 3)
        report.outputs_written.append("out/siphon-2024-03-01.md")
        report.add_error("load", "record 4: 1 validation error(s)", error_type="validation_error")
        report.finished_at = report.started_at + timedelta(seconds=2)

        text = report.summary_text()
        assert text.splitlines()[0] == "Analysis of 12 events finished in 2s"
        assert "Stages: load (12) → sort → cluster (3)" in text
        assert "Skipped: 1" in text
        assert "  - load/validation_error: record 4" in text
        assert "Wrote: out/siphon-2024-03-01.md" in text

    def test_summary_text_before_load(self) -> None:
        assert PipelineReport().summary_text() == "Analysis of events finished"

    def test_summary_text_truncates_errors(self) -> None:
        report = PipelineReport()
        for i in range(7):
            report.add_error("load", f"err {i}")
        assert "... and 2 more" in report.summary_text()


class TestReportPersistence:
    def test_round_trip(self, tmp_path: Path) -> None:
        report = PipelineReport()
        report.mark_stage_complete("summary", 1)
        report.finish()
        path = save_report(report, tmp_path / "out")
        assert path.name == REPORT_FILENAME

        loaded = load_report(tmp_path / "out")
        assert loaded is not None
        assert loaded.stages_completed == ["summary"]
        assert loaded.finished_at == report.finished_at

    def test_missing_report(self, tmp_path: Path) -> None:
        assert load_report(tmp_path) is None

    def test_corrupt_report(self, tmp_path: Path) -> None:
        (tmp_path / REPORT_FILENAME).write_text("{not json")
        assert load_report(tmp_path) is None
