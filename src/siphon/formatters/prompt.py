"""Prompt builder that serializes an analysis for external summarization."""

from __future__ import annotations

from siphon.models import AnalysisResult, Cluster

SYSTEM_PROMPT = """\
You are a content strategist helping developers turn their work sessions into engaging content.
You analyze their development activity data and suggest video ideas, blog posts, and social media threads.

Your suggestions should be:
1. Authentic - based on real struggles and breakthroughs, not manufactured drama
2. Educational - provide genuine value to other developers
3. Engaging - have compelling hooks that make people want to learn more
4. Actionable - include specific takeaways and lessons

Focus on the "aha moments" and debugging journeys - these make the best content.
Be concise but specific in your suggestions."""

REQUEST = """\
Based on this session data, please provide:

1. **3-5 Content Ideas** - For each idea include:
   - A catchy title
   - An attention-grabbing hook (first sentence)
   - Format recommendation (video/blog/thread/newsletter)
   - Brief outline (3-5 bullet points)
   - Target audience
   - Key takeaways (2-3)

2. **Weekly Theme** (optional) - If you see a pattern across my work, suggest a theme

3. **Series Potential** (optional) - If this could be part of a content series, describe it

Format your response as structured sections that are easy to parse."""


def _cluster_section(cluster: Cluster) -> str:
    signals = ", ".join(s.description for s in cluster.signals) or "none"
    return "\n".join(
        [
            f"### {cluster.topic} ({cluster.duration_minutes} min)",
            f"- Events: {cluster.event_count}",
            f"- Struggle score: {cluster.struggle_score}%",
            f"- Aha moment index: {cluster.aha_index}%",
            f"- Confidence: {cluster.confidence.value}",
            f"- Signals: {signals}",
        ]
    )


def build_prompt(result: AnalysisResult) -> str:
    """Build the user prompt describing one analysis run.

    The prompt lists the session summary, every cluster, breakthrough
    moments and the auto-detected ideas, then asks for refined ideas.
    """
    summary = result.summary
    duration = result.time_range.duration_minutes if result.time_range else 0
    topics = ", ".join(
        f"{t.topic} ({t.count} events, {t.time_minutes} min)" for t in summary.top_topics
    )

    parts = [
        f"I just completed a {duration}-minute development session. "
        "Here's my activity data:",
        "",
        "## Session Summary",
        f"- Total commands: {summary.total_commands} ({summary.failed_commands} failed)",
        f"- Struggle score: {summary.struggle_score}% (higher = more debugging)",
        f"- Top topics: {topics}",
        "",
        "## Work Clusters",
    ]
    for cluster in result.clusters:
        parts.extend(["", _cluster_section(cluster)])

    if summary.aha_moments:
        parts.extend(["", "## Breakthrough Moments"])
        parts.extend(f"- {aha.description}" for aha in summary.aha_moments)

    if result.ideas:
        parts.extend(["", "## Initial Content Ideas (auto-detected)"])
        for idx, idea in enumerate(result.ideas, start=1):
            parts.append(f"{idx}. {idea.title}")
            parts.append(f'   Hook: "{idea.hook}"')
            parts.append(f"   Format: {idea.suggested_format.value}")

    parts.extend(["", REQUEST])
    return "\n".join(parts)


def format_prompt(result: AnalysisResult) -> str:
    """Render the system prompt and the run prompt as one document.

    Both parts are needed to reproduce a summarizer request, so the
    exported file carries the system instructions in a leading section.
    """
    return "\n".join(
        ["# System", "", SYSTEM_PROMPT, "", "# User", "", build_prompt(result), ""]
    )
