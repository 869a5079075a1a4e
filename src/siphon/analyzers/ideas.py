"""Turn scored clusters into ranked content ideas."""

from __future__ import annotations

from siphon.models import Cluster, Confidence, ContentFormat, ContentIdea

SKIP_STRUGGLE_BELOW = 30
DEBUGGING_STORY_STRUGGLE = 50
BREAKTHROUGH_AHA = 40
DEEP_DIVE_MINUTES = 60
DEEP_DIVE_EVENTS = 15


def _debugging_journey(cluster: Cluster) -> ContentIdea:
    return ContentIdea(
        title=f"Debugging {cluster.topic}: A Developer's Journey",
        hook=(
            f"I spent {cluster.duration_minutes} minutes debugging {cluster.topic}. "
            "Here's what I learned."
        ),
        angle="Troubleshooting narrative with lessons learned",
        confidence=cluster.confidence,
        evidence=[
            f"{cluster.event_count} events over {cluster.duration_minutes} minutes",
            f"Struggle score: {cluster.struggle_score}%",
            ", ".join(s.description for s in cluster.signals),
        ],
        suggested_format=ContentFormat.VIDEO,
    )


def _breakthrough(cluster: Cluster) -> ContentIdea:
    return ContentIdea(
        title=f"The {cluster.topic} Bug That Took Me Hours (And the Simple Fix)",
        hook=(
            "After multiple failed attempts, I finally figured out the solution. "
            "Here's the journey."
        ),
        angle="Problem-solution narrative with the breakthrough moment",
        confidence=cluster.confidence,
        evidence=[
            f"Aha moment intensity: {cluster.aha_index}%",
            f"Topic: {cluster.topic}",
        ],
        suggested_format=ContentFormat.BLOG,
    )


def _deep_dive(cluster: Cluster) -> ContentIdea:
    return ContentIdea(
        title=f"Deep Dive: {cluster.topic}",
        hook=f"A comprehensive exploration of {cluster.topic} from my recent work session.",
        angle="Educational deep dive based on real work",
        confidence=cluster.confidence,
        evidence=[
            f"{cluster.duration_minutes} minute focused session",
            f"{cluster.event_count} events tracked",
        ],
        suggested_format=ContentFormat.VIDEO,
    )


def ideas_for_cluster(cluster: Cluster) -> list[ContentIdea]:
    """Evaluate one scored cluster; it may yield zero to three ideas."""
    if cluster.confidence == Confidence.LOW and cluster.struggle_score < SKIP_STRUGGLE_BELOW:
        return []

    ideas: list[ContentIdea] = []
    if cluster.struggle_score >= DEBUGGING_STORY_STRUGGLE:
        ideas.append(_debugging_journey(cluster))
    if cluster.aha_index >= BREAKTHROUGH_AHA:
        ideas.append(_breakthrough(cluster))
    if cluster.duration_minutes >= DEEP_DIVE_MINUTES and cluster.event_count >= DEEP_DIVE_EVENTS:
        ideas.append(_deep_dive(cluster))
    return ideas


def rank_ideas(ideas: list[ContentIdea]) -> list[ContentIdea]:
    """Order ideas high → medium → low, keeping input order within a rank."""
    return sorted(ideas, key=lambda idea: idea.confidence.rank)


def generate_content_ideas(clusters: list[Cluster]) -> list[ContentIdea]:
    """Generate ideas from clusters in detection order, then rank them."""
    ideas: list[ContentIdea] = []
    for cluster in clusters:
        ideas.extend(ideas_for_cluster(cluster))
    return rank_ideas(ideas)
