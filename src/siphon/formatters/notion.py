"""Notion-flavored Markdown: callout summary, topic table, idea blocks."""

from __future__ import annotations

from siphon.formatters.markdown import CONFIDENCE_MARKERS, MarkdownFormatter
from siphon.models import AnalysisResult, ContentFormat, ContentIdea

FORMAT_MARKERS: dict[ContentFormat, str] = {
    ContentFormat.VIDEO: "🎬",
    ContentFormat.BLOG: "📝",
    ContentFormat.THREAD: "🧵",
    ContentFormat.NEWSLETTER: "📧",
}


class NotionFormatter(MarkdownFormatter):
    """Markdown that pastes cleanly into a Notion page.

    Notion has no frontmatter, so the summary becomes a quote callout and
    the topics become a table.
    """

    def format_result(self, result: AnalysisResult, title: str | None = None) -> str:
        title = title or self.default_title(result)
        summary = result.summary
        duration = result.time_range.duration_minutes if result.time_range else 0
        lines = [
            f"# {title}",
            "",
            "> 📊 **Session Summary**",
            f"> Duration: {duration} minutes",
            f"> Events: {summary.total_events} | Commands: {summary.total_commands}",
            f"> Struggle Score: {summary.struggle_score}%",
            "",
        ]

        if summary.top_topics:
            lines.extend(["## 📁 Topics", "", "| Topic | Events | Time |", "| --- | --- | --- |"])
            for topic in summary.top_topics:
                lines.append(f"| {topic.topic} | {topic.count} | {topic.time_minutes} min |")
            lines.append("")

        if result.ideas:
            lines.extend(["## 💡 Content Ideas", ""])
            for idea in result.ideas:
                lines.extend(self._format_idea(idea))

        if summary.aha_moments:
            lines.extend(["## ⚡ Breakthroughs", ""])
            for aha in summary.aha_moments:
                lines.append(f"- 💡 {aha.description} ({aha.timestamp:%H:%M})")
            lines.append("")

        return "\n".join(lines)

    def _format_idea(self, idea: ContentIdea) -> list[str]:
        marker = FORMAT_MARKERS[idea.suggested_format]
        lines = [
            f"### {CONFIDENCE_MARKERS[idea.confidence]} {marker} {idea.title}",
            "",
            f"> **Hook:** {idea.hook}",
            "",
            f"- **Angle:** {idea.angle}",
            f"- **Format:** {idea.suggested_format.value}",
            f"- **Confidence:** {idea.confidence.value}",
            "",
            "**Evidence:**",
        ]
        lines.extend(f"- {e}" for e in idea.evidence)
        lines.extend(["", "---", ""])
        return lines


def format_notion(result: AnalysisResult, title: str | None = None) -> str:
    """Render an analysis result as a Notion page."""
    return NotionFormatter().format_result(result, title)
