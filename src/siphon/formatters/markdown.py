"""Obsidian-compatible Markdown export of an analysis result."""

from __future__ import annotations

from datetime import datetime

from siphon.models import AnalysisResult, Cluster, Confidence, ContentIdea, Session

CONFIDENCE_MARKERS: dict[Confidence, str] = {
    Confidence.HIGH: "🟢",
    Confidence.MEDIUM: "🟡",
    Confidence.LOW: "🔴",
}

NOTE_TAGS = ("siphon", "dev-activity")
DAILY_IDEA_LIMIT = 3


def _format_time(value: datetime) -> str:
    return value.strftime("%H:%M")


class MarkdownFormatter:
    """Formatter for Obsidian-flavored capture notes."""

    def __init__(self, include_analysis: bool = False) -> None:
        self.include_analysis = include_analysis

    def default_title(self, result: AnalysisResult) -> str:
        if result.time_range is None:
            return "Siphon Capture"
        return f"Siphon Capture - {result.time_range.start.date().isoformat()}"

    def note_name(self, result: AnalysisResult) -> str:
        """File stem for the note, e.g. ``siphon-2024-03-01``."""
        if result.time_range is None:
            return "siphon-capture"
        return f"siphon-{result.time_range.start.date().isoformat()}"

    def format_result(self, result: AnalysisResult, title: str | None = None) -> str:
        """Render the full note: frontmatter followed by the body.

        Args:
            result: Analysis result to render.
            title: Note title. Defaults to "Siphon Capture - <date>".

        Returns:
            Markdown string.
        """
        title = title or self.default_title(result)
        return self._format_frontmatter(result, title) + self._format_body(result, title)

    def format_daily_entry(self, result: AnalysisResult) -> str:
        """Short block to paste into an Obsidian daily note.

        Topics become wiki links and the top three ideas become tasks.
        """
        summary = result.summary
        duration = result.time_range.duration_minutes if result.time_range else 0
        worked_on = ", ".join(f"[[{t.topic}]]" for t in summary.top_topics) or "various topics"
        lines = [
            "## Siphon Activity",
            "",
            f"- Worked on: {worked_on}",
            f"- Duration: {duration} minutes",
            f"- Struggle score: {summary.struggle_score}%",
        ]
        if result.ideas:
            lines.extend(["", "### Content Ideas"])
            lines.extend(f"- [ ] {idea.title}" for idea in result.ideas[:DAILY_IDEA_LIMIT])
        return "\n".join(lines) + "\n"

    def _format_frontmatter(self, result: AnalysisResult, title: str) -> str:
        summary = result.summary
        topics = ", ".join(f'"{t.topic}"' for t in summary.top_topics)
        lines = ["---", f'title: "{title}"']
        if result.time_range is not None:
            lines.append(f"date: {result.time_range.start.isoformat()}")
            lines.append(f"duration_minutes: {result.time_range.duration_minutes}")
        lines.extend(
            [
                f"total_events: {summary.total_events}",
                f"struggle_score: {summary.struggle_score}",
                f"topics: [{topics}]",
                f"tags: [{', '.join(NOTE_TAGS)}]",
                "---",
                "",
            ]
        )
        return "\n".join(lines) + "\n"

    def _format_body(self, result: AnalysisResult, title: str) -> str:
        summary = result.summary
        duration = result.time_range.duration_minutes if result.time_range else 0
        lines = [
            f"# {title}",
            "",
            "## Summary",
            "",
            f"- **Duration:** {duration} minutes",
            f"- **Total Events:** {summary.total_events}",
            f"- **Commands:** {summary.total_commands} ({summary.failed_commands} failed)",
            f"- **Struggle Score:** {summary.struggle_score}%",
            f"- **Sessions:** {summary.session_count}",
            "",
        ]

        if summary.top_topics:
            lines.extend(["## Topics", ""])
            for topic in summary.top_topics:
                lines.append(
                    f"- **{topic.topic}:** {topic.count} events ({topic.time_minutes} min)"
                )
            lines.append("")

        if summary.aha_moments:
            lines.extend(["## Breakthroughs", ""])
            for aha in summary.aha_moments:
                lines.append(f"- {aha.description} at {_format_time(aha.timestamp)}")
            lines.append("")

        if result.ideas:
            lines.extend(["## Content Ideas", ""])
            for idea in result.ideas:
                lines.extend(self._format_idea(idea))

        if self.include_analysis and result.clusters:
            lines.extend(["## Detailed Clusters", ""])
            for cluster in result.clusters:
                lines.extend(self._format_cluster(cluster))

        if self.include_analysis and result.sessions:
            lines.extend(["## Sessions", ""])
            for session in result.sessions:
                lines.append(self._format_session(session))
            lines.append("")

        return "\n".join(lines)

    def _format_idea(self, idea: ContentIdea) -> list[str]:
        return [
            f"### {CONFIDENCE_MARKERS[idea.confidence]} {idea.title}",
            "",
            f"> {idea.hook}",
            "",
            f"- **Angle:** {idea.angle}",
            f"- **Format:** {idea.suggested_format.value}",
            f"- **Evidence:** {'; '.join(idea.evidence)}",
            "",
        ]

    def _format_cluster(self, cluster: Cluster) -> list[str]:
        lines = [
            f"### {cluster.topic}",
            "",
            f"- **Time:** {_format_time(cluster.start_time)} - {_format_time(cluster.end_time)}",
            f"- **Duration:** {cluster.duration_minutes} minutes",
            f"- **Events:** {cluster.event_count}",
            f"- **Confidence:** {cluster.confidence.value}",
            f"- **Struggle Score:** {cluster.struggle_score}%",
            f"- **Aha Index:** {cluster.aha_index}%",
        ]
        if cluster.signals:
            lines.append(f"- **Signals:** {', '.join(s.type.value for s in cluster.signals)}")
        lines.append("")
        return lines

    def _format_session(self, session: Session) -> str:
        line = (
            f"- {_format_time(session.start_time)} - {_format_time(session.end_time)} "
            f"({session.duration_minutes} min): {session.description}"
        )
        if session.gap_before_minutes is not None:
            line += f" _(after a {session.gap_before_minutes} min break)_"
        return line


def format_markdown(
    result: AnalysisResult,
    title: str | None = None,
    include_analysis: bool = False,
) -> str:
    """Render an analysis result as an Obsidian note."""
    return MarkdownFormatter(include_analysis=include_analysis).format_result(result, title)


def format_daily_entry(result: AnalysisResult) -> str:
    """Render the daily-note block for an analysis result."""
    return MarkdownFormatter().format_daily_entry(result)
