"""Core analysis pipeline for developer-activity events.

``analyze`` is synchronous and pure: it does no I/O, keeps no state between
calls, and each stage consumes the previous stage's full output before the
next one starts.
"""

from __future__ import annotations

import logging
from datetime import datetime

from siphon.analyzers import (
    cluster_events,
    generate_content_ideas,
    score_cluster,
    segment_sessions,
    summarize,
)
from siphon.analyzers.numbers import minutes_between
from siphon.config import AnalysisSectionConfig
from siphon.errors import PipelineReport
from siphon.models import AnalysisResult, Event, TimeRange

logger = logging.getLogger(__name__)


def sort_events(events: list[Event]) -> list[Event]:
    """Sort events by timestamp; equal timestamps keep their input order."""
    return sorted(events, key=lambda e: e.timestamp)


def _time_range(
    events: list[Event],
    time_window: tuple[datetime, datetime] | None,
) -> TimeRange | None:
    if time_window is not None:
        start, end = time_window
    elif events:
        start, end = events[0].timestamp, events[-1].timestamp
    else:
        return None
    return TimeRange(start=start, end=end, duration_minutes=minutes_between(start, end))


def analyze(
    events: list[Event],
    time_window: tuple[datetime, datetime] | None = None,
    *,
    settings: AnalysisSectionConfig | None = None,
    report: PipelineReport | None = None,
) -> AnalysisResult:
    """Run the full analysis over an event snapshot.

    Args:
        events: Events in any order; they are sorted first.
        time_window: The capture window to report. Defaults to the span
            from the first to the last event.
        settings: Gap thresholds. Defaults to 30-minute clusters and
            120-minute sessions.
        report: Optional run report; each finished stage is recorded on it.

    Returns:
        The analysis result. An empty snapshot gives empty clusters,
        sessions and ideas and a zeroed summary.
    """
    settings = settings or AnalysisSectionConfig()

    def _done(stage: str, items: int) -> None:
        logger.debug("Stage %s finished with %d items", stage, items)
        if report is not None:
            report.mark_stage_complete(stage, items)

    sorted_events = sort_events(events)
    _done("sort", len(sorted_events))

    clusters = cluster_events(sorted_events, settings.cluster_gap_minutes)
    _done("cluster", len(clusters))

    for cluster in clusters:
        score_cluster(cluster)
    _done("score", len(clusters))

    sessions = segment_sessions(sorted_events, clusters, settings.session_gap_minutes)
    _done("sessions", len(sessions))

    ideas = generate_content_ideas(clusters)
    _done("ideas", len(ideas))

    summary = summarize(sorted_events, clusters, sessions)
    _done("summary", summary.total_events)

    logger.info(
        "Analyzed %d events: %d clusters, %d sessions, %d ideas",
        len(sorted_events),
        len(clusters),
        len(sessions),
        len(ideas),
    )

    return AnalysisResult(
        time_range=_time_range(sorted_events, time_window),
        events=sorted_events,
        clusters=clusters,
        sessions=sessions,
        ideas=ideas,
        summary=summary,
    )
