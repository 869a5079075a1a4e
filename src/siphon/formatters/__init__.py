"""Formatters for analysis output."""

from siphon.formatters.json_export import build_export, format_json
from siphon.formatters.markdown import MarkdownFormatter, format_daily_entry, format_markdown
from siphon.formatters.notion import NotionFormatter, format_notion
from siphon.formatters.prompt import SYSTEM_PROMPT, build_prompt, format_prompt
from siphon.formatters.rss import build_feed, format_rss
from siphon.formatters.templates import get_template, get_templates, render_template

__all__ = [
    "MarkdownFormatter",
    "NotionFormatter",
    "SYSTEM_PROMPT",
    "build_export",
    "build_feed",
    "build_prompt",
    "format_daily_entry",
    "format_json",
    "format_markdown",
    "format_notion",
    "format_prompt",
    "format_rss",
    "get_template",
    "get_templates",
    "render_template",
]
