"""Global roll-up statistics for an analysis run."""

from __future__ import annotations

from siphon.analyzers.numbers import round_half_up
from siphon.models import (
    AhaMoment,
    AnalysisSummary,
    Cluster,
    Event,
    Session,
    TopicStat,
    shell_events,
)

TOP_TOPICS_LIMIT = 5
AHA_MOMENT_THRESHOLD = 30


def overall_struggle_score(events: list[Event]) -> int:
    """Percentage of failed shell commands across every event.

    This is a plain failure rate, not an average of cluster scores.
    """
    shell = shell_events(events)
    if not shell:
        return 0
    failed = sum(1 for e in shell if e.payload.failed)
    return round_half_up(failed / len(shell) * 100)


def top_topics(clusters: list[Cluster], limit: int = TOP_TOPICS_LIMIT) -> list[TopicStat]:
    """Event count and cluster minutes per topic, busiest first."""
    stats: dict[str, list[int]] = {}
    for cluster in clusters:
        count, minutes = stats.get(cluster.topic, [0, 0])
        stats[cluster.topic] = [count + cluster.event_count, minutes + cluster.duration_minutes]

    ranked = sorted(stats.items(), key=lambda item: item[1][0], reverse=True)
    return [
        TopicStat(topic=topic, count=count, time_minutes=minutes)
        for topic, (count, minutes) in ranked[:limit]
    ]


def aha_moments(clusters: list[Cluster]) -> list[AhaMoment]:
    return [
        AhaMoment(description=f"Breakthrough in {c.topic}", timestamp=c.end_time)
        for c in clusters
        if c.aha_index >= AHA_MOMENT_THRESHOLD
    ]


def summarize(
    events: list[Event],
    clusters: list[Cluster],
    sessions: list[Session],
) -> AnalysisSummary:
    """Aggregate counts and scores across the whole run.

    Args:
        events: All events of the run.
        clusters: Scored clusters.
        sessions: Segmented sessions.

    Returns:
        Summary with zeroed fields when there is nothing to aggregate.
    """
    shell = shell_events(events)
    session_minutes = sum(s.duration_minutes for s in sessions)
    average = round_half_up(session_minutes / len(sessions)) if sessions else 0

    return AnalysisSummary(
        total_events=len(events),
        total_commands=len(shell),
        failed_commands=sum(1 for e in shell if e.payload.failed),
        struggle_score=overall_struggle_score(events),
        top_topics=top_topics(clusters),
        aha_moments=aha_moments(clusters),
        session_count=len(sessions),
        average_session_minutes=average,
    )
