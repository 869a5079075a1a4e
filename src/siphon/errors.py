"""Exceptions and the per-run report written next to siphon's outputs."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

REPORT_FILENAME = ".siphon-last-run.json"


class SiphonError(Exception):
    """Base class for siphon errors."""


class EventSourceError(SiphonError):
    """An event snapshot could not be read at all."""


class UnknownTemplateError(SiphonError):
    """No content template is registered under the requested name."""


class PipelineError(BaseModel):
    """A record or stage problem that the run worked around."""

    stage: str
    source: str = ""
    error_type: str = "unknown"
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class PipelineReport(BaseModel):
    """What one `siphon analyze` run did: stages, counts, skips and outputs."""

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None
    stages_completed: list[str] = Field(default_factory=list)
    errors: list[PipelineError] = Field(default_factory=list)
    items_processed: dict[str, int] = Field(default_factory=dict)
    outputs_written: list[str] = Field(default_factory=list)

    def add_error(
        self,
        stage: str,
        message: str,
        *,
        source: str = "",
        error_type: str = "unknown",
    ) -> None:
        """Record a skipped record or other worked-around problem."""
        self.errors.append(
            PipelineError(stage=stage, source=source, error_type=error_type, message=message)
        )

    def mark_stage_complete(self, stage: str, items: int | None = None) -> None:
        """Record that a pipeline stage completed, optionally with its item count."""
        if stage not in self.stages_completed:
            self.stages_completed.append(stage)
        if items is not None:
            self.items_processed[stage] = items

    def finish(self) -> None:
        """Mark the report as finished."""
        self.finished_at = datetime.now()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def overwrites(self, path: str | Path) -> bool:
        """True if this run already wrote *path*."""
        return str(path) in self.outputs_written

    def summary_text(self) -> str:
        """Multi-line account of the run, for verbose logging."""
        duration = ""
        if self.finished_at:
            secs = (self.finished_at - self.started_at).total_seconds()
            duration = f" in {secs:.0f}s" if secs < 60 else f" in {secs / 60:.1f}m"

        loaded = self.items_processed.get("load")
        subject = f"{loaded} events" if loaded is not None else "events"
        lines = [f"Analysis of {subject} finished{duration}"]

        if self.stages_completed:
            stages = [
                f"{stage} ({self.items_processed[stage]})"
                if stage in self.items_processed
                else stage
                for stage in self.stages_completed
            ]
            lines.append(f"Stages: {' → '.join(stages)}")

        if self.errors:
            lines.append(f"Skipped: {len(self.errors)}")
            for err in self.errors[:5]:
                lines.append(f"  - {err.stage}/{err.error_type}: {err.message}")
            if len(self.errors) > 5:
                lines.append(f"  ... and {len(self.errors) - 5} more")

        for path in self.outputs_written:
            lines.append(f"Wrote: {path}")

        return "\n".join(lines)


def save_report(report: PipelineReport, output_dir: Path) -> Path:
    """Save the run report into the output directory."""
    report_path = output_dir / REPORT_FILENAME
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    return report_path


def load_report(output_dir: Path) -> PipelineReport | None:
    """Load the previous run's report from the output directory, if any."""
    report_path = output_dir / REPORT_FILENAME
    if not report_path.exists():
        return None
    try:
        data = json.loads(report_path.read_text(encoding="utf-8"))
        return PipelineReport.model_validate(data)
    except (json.JSONDecodeError, ValueError):
        logger.warning("Corrupt report at %s", report_path)
        return None
