"""Session segmentation: coarse work periods separated by long idle gaps."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime

from siphon.analyzers.numbers import gap_minutes, minutes_between, round_half_up
from siphon.analyzers.topics import GENERAL
from siphon.models import Cluster, Event, Session

logger = logging.getLogger(__name__)

SESSION_GAP_MINUTES = 120
DEFAULT_DESCRIPTION = "Development session"


def top_cluster_topics(clusters: list[Cluster], limit: int = 3) -> list[str]:
    """Rank non-general topics by how many events their clusters hold."""
    counts: Counter[str] = Counter()
    for cluster in clusters:
        if cluster.topic != GENERAL:
            counts[cluster.topic] += cluster.event_count
    # Counter.most_common keeps first-seen order for equal counts
    return [topic for topic, _ in counts.most_common(limit)]


def _contained_clusters(
    clusters: list[Cluster], start: datetime, end: datetime
) -> list[Cluster]:
    return [c for c in clusters if c.start_time >= start and c.end_time <= end]


def _build_session(
    events: list[Event],
    clusters: list[Cluster],
    gap_before: int | None,
) -> Session:
    start_time = events[0].timestamp
    end_time = events[-1].timestamp
    session_clusters = _contained_clusters(clusters, start_time, end_time)
    topics = top_cluster_topics(session_clusters)
    description = f"Working on {', '.join(topics)}" if topics else DEFAULT_DESCRIPTION
    return Session(
        start_time=start_time,
        end_time=end_time,
        duration_minutes=minutes_between(start_time, end_time),
        events=list(events),
        clusters=session_clusters,
        gap_before_minutes=gap_before,
        description=description,
    )


def segment_sessions(
    events: list[Event],
    clusters: list[Cluster],
    gap_minutes_threshold: int = SESSION_GAP_MINUTES,
) -> list[Session]:
    """Split time-sorted events into sessions, ignoring topic.

    A gap longer than the threshold closes the running session. The gap is
    recorded on the session that follows it, so the first session never
    has ``gap_before_minutes``. Each session lists the clusters that lie
    entirely within its time window; a cluster that only overlaps it is not
    included.

    Args:
        events: Events sorted ascending by timestamp.
        clusters: Finalized clusters over the same events.
        gap_minutes_threshold: Idle time (minutes) that ends a session.

    Returns:
        Sessions in chronological order.
    """
    sessions: list[Session] = []
    current: list[Event] = []
    gap_before: int | None = None

    for event in events:
        if current:
            gap = gap_minutes(current[-1].timestamp, event.timestamp)
            if gap > gap_minutes_threshold:
                sessions.append(_build_session(current, clusters, gap_before))
                current = []
                gap_before = round_half_up(gap)
        current.append(event)

    if current:
        sessions.append(_build_session(current, clusters, gap_before))

    logger.debug("Segmented %d events into %d sessions", len(events), len(sessions))
    return sessions
