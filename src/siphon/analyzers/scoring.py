"""Struggle and breakthrough ("aha") scoring for clusters.

Both scores are heuristics on 0-100 computed from shell events only.

The retry factor of the struggle score groups commands by their first
word, while the exploration signal in ``signals`` groups by the first two.
The two groupings are kept independent on purpose; do not merge them.
"""

from __future__ import annotations

from collections import Counter

from siphon.analyzers.numbers import round_half_up
from siphon.analyzers.signals import detect_learning_signals, normalize_command
from siphon.models import Cluster, Event, shell_events

FAILURE_WEIGHT = 40
RETRY_POINTS_PER_REPEAT = 5
RETRY_CAP = 30
DURATION_CAP = 30

AHA_MIN_SHELL_EVENTS = 3
AHA_MIN_STREAK = 2
AHA_POINTS_PER_FAILURE = 15


def struggle_score(events: list[Event]) -> int:
    """Score how much debugging a run of events shows.

    Sum of three capped factors:
    - failure rate, up to 40 points;
    - the most repeated first command word, 5 points per repeat, up to 30;
    - mean command duration, one point per second, up to 30.

    Returns 0 when there are no shell events.
    """
    shell = shell_events(events)
    if not shell:
        return 0

    failed = sum(1 for e in shell if e.payload.failed)
    failure_score = min(max(round_half_up(failed / len(shell) * FAILURE_WEIGHT), 0), FAILURE_WEIGHT)

    first_words: Counter[str] = Counter(normalize_command(e.payload.command, 1) for e in shell)
    max_repeats = max(first_words.values())
    retry_score = min(max_repeats * RETRY_POINTS_PER_REPEAT, RETRY_CAP)

    mean_ms = sum(e.payload.duration_ms for e in shell) / len(shell)
    duration_score = min(round_half_up(mean_ms / 1000), DURATION_CAP)

    return min(failure_score + retry_score + duration_score, 100)


def aha_index(events: list[Event]) -> int:
    """Score the strongest success-after-failures moment.

    One forward pass over shell events: consecutive failures build a
    streak, and a success that ends a streak of two or more scores
    ``streak * 15`` (capped at 100). The best such moment wins. Any success
    resets the streak.

    Returns 0 with fewer than three shell events.
    """
    shell = shell_events(events)
    if len(shell) < AHA_MIN_SHELL_EVENTS:
        return 0

    best = 0
    streak = 0
    for event in shell:
        if event.payload.failed:
            streak += 1
            continue
        if streak >= AHA_MIN_STREAK:
            best = max(best, min(streak * AHA_POINTS_PER_FAILURE, 100))
        streak = 0

    return best


def score_cluster(cluster: Cluster) -> Cluster:
    """Attach signals, struggle score and aha index to a cluster in place."""
    cluster.signals = detect_learning_signals(cluster.events)
    cluster.struggle_score = struggle_score(cluster.events)
    cluster.aha_index = aha_index(cluster.events)
    return cluster
