"""Derived analysis models: clusters, sessions, signals, ideas, summary.

These are recomputed on every run and owned by the caller; nothing in the
pipeline persists them.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from siphon.models.event import Event


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class Confidence(StrEnum):
    """Evidentiary weight of a cluster (and of the ideas drawn from it)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, strongest first."""
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {Confidence.HIGH: 0, Confidence.MEDIUM: 1, Confidence.LOW: 2}


class SignalType(StrEnum):
    DEBUGGING = "debugging"
    EXPLORATION = "exploration"
    RESEARCH = "research"
    TROUBLESHOOTING = "troubleshooting"
    BREAKTHROUGH = "breakthrough"


class ContentFormat(StrEnum):
    VIDEO = "video"
    BLOG = "blog"
    THREAD = "thread"
    NEWSLETTER = "newsletter"


class LearningSignal(BaseModel):
    """A debugging or exploration pattern spotted inside a cluster."""

    type: SignalType
    description: str
    intensity: int = Field(default=0, ge=0, le=100)


class Cluster(BaseModel):
    """A maximal run of temporally close, topic-coherent events."""

    id: str = Field(default_factory=_new_id)
    topic: str
    events: list[Event] = Field(default_factory=list)
    start_time: datetime
    end_time: datetime
    duration_minutes: int = 0
    confidence: Confidence = Confidence.LOW
    struggle_score: int = Field(default=0, ge=0, le=100)
    aha_index: int = Field(default=0, ge=0, le=100)
    signals: list[LearningSignal] = Field(default_factory=list)

    @property
    def event_count(self) -> int:
        return len(self.events)


class Session(BaseModel):
    """A stretch of activity bounded by long inactivity gaps."""

    id: str = Field(default_factory=_new_id)
    start_time: datetime
    end_time: datetime
    duration_minutes: int = 0
    events: list[Event] = Field(default_factory=list)
    clusters: list[Cluster] = Field(default_factory=list)
    gap_before_minutes: int | None = None
    description: str = ""


class ContentIdea(BaseModel):
    """A ranked suggestion for a video, post or thread."""

    title: str
    hook: str
    angle: str
    confidence: Confidence
    evidence: list[str] = Field(default_factory=list)
    suggested_format: ContentFormat


class TopicStat(BaseModel):
    topic: str
    count: int
    time_minutes: int


class AhaMoment(BaseModel):
    description: str
    timestamp: datetime


class AnalysisSummary(BaseModel):
    """Global roll-up across all clusters and sessions."""

    total_events: int = 0
    total_commands: int = 0
    failed_commands: int = 0
    struggle_score: int = 0
    top_topics: list[TopicStat] = Field(default_factory=list)
    aha_moments: list[AhaMoment] = Field(default_factory=list)
    session_count: int = 0
    average_session_minutes: int = 0


class TimeRange(BaseModel):
    start: datetime
    end: datetime
    duration_minutes: int = 0


class AnalysisResult(BaseModel):
    """Everything one pipeline run derives from an event snapshot."""

    time_range: TimeRange | None = None
    events: list[Event] = Field(default_factory=list)
    clusters: list[Cluster] = Field(default_factory=list)
    sessions: list[Session] = Field(default_factory=list)
    ideas: list[ContentIdea] = Field(default_factory=list)
    summary: AnalysisSummary = Field(default_factory=AnalysisSummary)
