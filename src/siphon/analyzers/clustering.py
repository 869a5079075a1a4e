"""Temporal clustering of sorted events into topic-coherent clusters."""

from __future__ import annotations

import logging

from siphon.analyzers.numbers import gap_minutes, minutes_between
from siphon.analyzers.topics import GENERAL, detect_topic
from siphon.models import Cluster, Confidence, Event

logger = logging.getLogger(__name__)

CLUSTER_GAP_MINUTES = 30

HIGH_CONFIDENCE_EVENTS = 10
HIGH_CONFIDENCE_MINUTES = 60
MEDIUM_CONFIDENCE_EVENTS = 5


def cluster_confidence(event_count: int, duration_minutes: int) -> Confidence:
    """Rate how much evidence a cluster carries."""
    if event_count >= HIGH_CONFIDENCE_EVENTS and duration_minutes >= HIGH_CONFIDENCE_MINUTES:
        return Confidence.HIGH
    if event_count >= MEDIUM_CONFIDENCE_EVENTS:
        return Confidence.MEDIUM
    return Confidence.LOW


def build_cluster(events: list[Event], topic: str) -> Cluster:
    """Finalize an accumulated run of events into a cluster.

    Scores and signals start empty; the scoring stage fills them in.
    """
    start_time = events[0].timestamp
    end_time = events[-1].timestamp
    duration = minutes_between(start_time, end_time)
    return Cluster(
        topic=topic or GENERAL,
        events=list(events),
        start_time=start_time,
        end_time=end_time,
        duration_minutes=duration,
        confidence=cluster_confidence(len(events), duration),
    )


def cluster_events(
    events: list[Event],
    gap_minutes_threshold: int = CLUSTER_GAP_MINUTES,
) -> list[Cluster]:
    """Group time-sorted events into clusters.

    A new cluster starts when the gap since the previous event exceeds the
    threshold, or when an event carries a topic other than the current one.
    ``"general"`` events never split a cluster or change its topic; they
    join whatever cluster is open.

    Args:
        events: Events sorted ascending by timestamp.
        gap_minutes_threshold: Largest gap (minutes) allowed inside a cluster.

    Returns:
        Clusters in chronological order. Every event lands in exactly one.
    """
    clusters: list[Cluster] = []
    current: list[Event] = []
    current_topic = ""

    for event in events:
        topic = detect_topic(event)
        gap = gap_minutes(current[-1].timestamp, event.timestamp) if current else 0.0

        start_new = (
            not current
            or gap > gap_minutes_threshold
            or (topic != current_topic and topic != GENERAL)
        )
        if start_new and current:
            clusters.append(build_cluster(current, current_topic))
            current = []

        current.append(event)
        if topic != GENERAL:
            current_topic = topic

    if current:
        clusters.append(build_cluster(current, current_topic))

    logger.debug("Clustered %d events into %d clusters", len(events), len(clusters))
    return clusters
