"""Hand-built analysis results shared by the formatter tests."""

from datetime import datetime, timezone

import pytest

from siphon.models import (
    AhaMoment,
    AnalysisResult,
    AnalysisSummary,
    Cluster,
    Confidence,
    ContentFormat,
    ContentIdea,
    TimeRange,
    TopicStat,
)

DAY_START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
DAY_END = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)


def _idea(title: str, fmt: ContentFormat, confidence: Confidence) -> ContentIdea:
    return ContentIdea(
        title=title,
        hook=f"Hook for {title}",
        angle=f"Angle for {title}",
        confidence=confidence,
        evidence=[f"{title} evidence A", f"{title} evidence B"],
        suggested_format=fmt,
    )


@pytest.fixture
def curated_result() -> AnalysisResult:
    """Ninety minutes of docker work with four ideas, one per format."""
    return AnalysisResult(
        time_range=TimeRange(start=DAY_START, end=DAY_END, duration_minutes=90),
        clusters=[
            Cluster(topic="docker", start_time=DAY_START, end_time=DAY_END, duration_minutes=90),
            Cluster(topic="git", start_time=DAY_END, end_time=DAY_END),
        ],
        ideas=[
            _idea("Docker Layers", ContentFormat.VIDEO, Confidence.HIGH),
            _idea("Compose Gotchas", ContentFormat.BLOG, Confidence.MEDIUM),
            _idea("Cache Busting", ContentFormat.THREAD, Confidence.LOW),
            _idea("Weekly Docker", ContentFormat.NEWSLETTER, Confidence.LOW),
        ],
        summary=AnalysisSummary(
            total_events=40,
            total_commands=30,
            failed_commands=18,
            struggle_score=60,
            top_topics=[
                TopicStat(topic="docker", count=35, time_minutes=80),
                TopicStat(topic="git", count=5, time_minutes=10),
            ],
            aha_moments=[
                AhaMoment(
                    description="Breakthrough in docker",
                    timestamp=datetime(2024, 3, 1, 10, 5, tzinfo=timezone.utc),
                )
            ],
            session_count=1,
            average_session_minutes=90,
        ),
    )
