"""Event snapshot loader.

Collectors (shell history, browser databases, git logs) run outside this
package and hand over a materialized snapshot, either a JSON document or a
JSON Lines file. This module validates that snapshot into ``Event`` models.
Bad records are skipped and reported; they never abort a run.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from siphon.errors import EventSourceError, PipelineReport
from siphon.models import Event

logger = logging.getLogger(__name__)

_EVENT_ADAPTER: TypeAdapter[Event] = TypeAdapter(Event)

LOAD_STAGE = "load"


def _record_error(
    report: PipelineReport | None,
    message: str,
    *,
    source: str,
    error_type: str,
) -> None:
    logger.warning("Skipping event record (%s): %s", source, message)
    if report is not None:
        report.add_error(LOAD_STAGE, message, source=source, error_type=error_type)


def parse_events(
    records: Iterable[Any],
    report: PipelineReport | None = None,
    *,
    origin: str = "records",
) -> list[Event]:
    """Validate raw event records.

    Args:
        records: Dicts in the collector format (snake_case or camelCase keys).
        report: Optional run report that collects skipped records.
        origin: Label used in log and report messages.

    Returns:
        Valid events in input order.
    """
    events: list[Event] = []
    for index, record in enumerate(records):
        try:
            events.append(_EVENT_ADAPTER.validate_python(record))
        except ValidationError as exc:
            _record_error(
                report,
                f"record {index}: {exc.error_count()} validation error(s)",
                source=origin,
                error_type="validation_error",
            )
    return events


def _read_json(path: Path) -> list[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        raise EventSourceError(f"{path}: expected a list of events")
    return data


def _read_jsonl(path: Path, report: PipelineReport | None) -> list[Any]:
    records: list[Any] = []
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                _record_error(
                    report,
                    f"line {line_no}: {exc.msg}",
                    source=str(path),
                    error_type="json_error",
                )
    return records


def load_events(path: str | Path, report: PipelineReport | None = None) -> list[Event]:
    """Load an event snapshot from a ``.json`` or ``.jsonl`` file.

    A ``.json`` file holds either a list of events or an object with an
    ``"events"`` list. Any other suffix is read as JSON Lines.

    Raises:
        EventSourceError: The file is missing, unreadable, or not a JSON
            document of events.
    """
    path = Path(path)
    try:
        if path.suffix.lower() == ".json":
            records = _read_json(path)
        else:
            records = _read_jsonl(path, report)
    except (OSError, UnicodeDecodeError) as exc:
        raise EventSourceError(f"Cannot read events from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EventSourceError(f"Invalid JSON in {path}: {exc.msg}") from exc

    events = parse_events(records, report, origin=str(path))
    logger.info("Loaded %d events from %s", len(events), path)
    if report is not None:
        report.mark_stage_complete(LOAD_STAGE, len(events))
    return events
