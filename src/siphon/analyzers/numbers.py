"""Rounding and time arithmetic shared by the analyzers."""

from __future__ import annotations

import math
from datetime import datetime


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up.

    Python's ``round`` rounds halves to even (``round(2.5) == 2``); scores
    and durations here always round ``.5`` upward.
    """
    return math.floor(value + 0.5)


def gap_minutes(earlier: datetime, later: datetime) -> float:
    """Exact gap between two instants in minutes."""
    return (later - earlier).total_seconds() / 60


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, rounded half-up."""
    return round_half_up(gap_minutes(start, end))
