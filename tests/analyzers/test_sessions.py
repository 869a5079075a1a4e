"""Tests for session segmentation."""

from datetime import datetime, timedelta, timezone

from siphon.analyzers.clustering import cluster_events
from siphon.analyzers.sessions import (
    DEFAULT_DESCRIPTION,
    segment_sessions,
    top_cluster_topics,
)
from siphon.models import Cluster, ShellEvent, ShellPayload

START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _at(minutes: float) -> datetime:
    return START + timedelta(minutes=minutes)


def _cmd(minutes: float, command: str = "docker ps") -> ShellEvent:
    return ShellEvent(
        id=f"cmd-{minutes}",
        timestamp=_at(minutes),
        payload=ShellPayload(command=command),
    )


def _segment(events: list[ShellEvent], **kwargs):
    return segment_sessions(events, cluster_events(events), **kwargs)


class TestSegmentSessions:
    def test_empty_input(self) -> None:
        assert segment_sessions([], []) == []

    def test_gap_recorded_on_following_session(self) -> None:
        sessions = _segment([_cmd(0), _cmd(30), _cmd(181)])
        assert len(sessions) == 2
        assert sessions[0].gap_before_minutes is None
        assert sessions[1].gap_before_minutes == 151
        assert len(sessions[0].events) == 2
        assert len(sessions[1].events) == 1

    def test_gap_at_threshold_does_not_split(self) -> None:
        sessions = _segment([_cmd(0), _cmd(120)])
        assert len(sessions) == 1
        assert sessions[0].duration_minutes == 120

    def test_custom_threshold(self) -> None:
        sessions = _segment([_cmd(0), _cmd(50)], gap_minutes_threshold=45)
        assert len(sessions) == 2
        assert sessions[1].gap_before_minutes == 50

    def test_topic_does_not_split_sessions(self) -> None:
        events = [_cmd(0, "docker ps"), _cmd(5, "kubectl get pods"), _cmd(10, "npm install")]
        sessions = _segment(events)
        assert len(sessions) == 1
        assert len(sessions[0].clusters) == 3

    def test_description_lists_top_topics(self) -> None:
        events = [
            _cmd(0, "docker ps"),
            _cmd(1, "kubectl get pods"),
            _cmd(2, "kubectl get svc"),
            _cmd(3, "npm install"),
            _cmd(4, "cargo build"),
        ]
        sessions = _segment(events)
        assert sessions[0].description == "Working on kubernetes, docker, node"

    def test_generic_description_without_topics(self) -> None:
        sessions = _segment([_cmd(0, "ls"), _cmd(1, "pwd")])
        assert sessions[0].description == DEFAULT_DESCRIPTION

    def test_every_event_in_exactly_one_session(self) -> None:
        events = [_cmd(m) for m in (0, 10, 200, 210, 500)]
        sessions = _segment(events)
        assert [e.id for s in sessions for e in s.events] == [e.id for e in events]

    def test_cluster_must_be_fully_contained(self) -> None:
        events = [_cmd(0), _cmd(10)]
        inside = cluster_events(events)[0]
        overlapping = Cluster(topic="docker", start_time=_at(-5), end_time=_at(5))
        sessions = segment_sessions(events, [inside, overlapping])
        assert sessions[0].clusters == [inside]


class TestTopClusterTopics:
    def test_general_excluded(self) -> None:
        clusters = cluster_events([_cmd(0, "ls"), _cmd(1, "pwd"), _cmd(2, "docker ps")])
        assert top_cluster_topics(clusters) == ["docker"]

    def test_ties_keep_first_seen_order(self) -> None:
        clusters = cluster_events(
            [_cmd(0, "npm install"), _cmd(1, "docker ps"), _cmd(2, "cargo build")]
        )
        assert top_cluster_topics(clusters) == ["node", "docker", "rust"]

    def test_limit(self) -> None:
        clusters = cluster_events(
            [_cmd(0, "npm install"), _cmd(1, "docker ps"), _cmd(2, "cargo build")]
        )
        assert top_cluster_topics(clusters, limit=1) == ["node"]
