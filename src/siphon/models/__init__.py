"""Event and analysis data models."""

from siphon.models.analysis import (
    AhaMoment,
    AnalysisResult,
    AnalysisSummary,
    Cluster,
    Confidence,
    ContentFormat,
    ContentIdea,
    LearningSignal,
    Session,
    SignalType,
    TimeRange,
    TopicStat,
)
from siphon.models.event import (
    BrowserEvent,
    BrowserPayload,
    EditorEvent,
    EditorPayload,
    Event,
    EventSource,
    FilesystemEvent,
    GitEvent,
    GitPayload,
    ShellEvent,
    ShellPayload,
    shell_events,
)

__all__ = [
    "AhaMoment",
    "AnalysisResult",
    "AnalysisSummary",
    "BrowserEvent",
    "BrowserPayload",
    "Cluster",
    "Confidence",
    "ContentFormat",
    "ContentIdea",
    "EditorEvent",
    "EditorPayload",
    "Event",
    "EventSource",
    "FilesystemEvent",
    "GitEvent",
    "GitPayload",
    "LearningSignal",
    "Session",
    "ShellEvent",
    "ShellPayload",
    "SignalType",
    "TimeRange",
    "TopicStat",
    "shell_events",
]
