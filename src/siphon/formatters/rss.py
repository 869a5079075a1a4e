"""RSS 2.0 feed of content ideas, one item per idea."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime

from siphon.models import AnalysisResult, ContentIdea

FEED_TITLE = "Siphon Content Ideas"
FEED_DESCRIPTION = "Content ideas generated from developer activity"
FEED_LINK = "https://github.com/siphon-dev/siphon"
FEED_GENERATOR = "Siphon CLI"


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _item_description(idea: ContentIdea) -> str:
    evidence = "\n".join(f"- {e}" for e in idea.evidence)
    return (
        f"{idea.hook}\n\n"
        f"Angle: {idea.angle}\n"
        f"Format: {idea.suggested_format.value}\n"
        f"Confidence: {idea.confidence.value}\n\n"
        f"Evidence:\n{evidence}"
    )


def build_feed(
    result: AnalysisResult,
    title: str | None = None,
    built_at: datetime | None = None,
) -> ET.Element:
    """Build the ``<rss>`` element for an analysis result.

    Items carry the idea's hook, angle, format, confidence and evidence.
    Their publication date is the end of the analyzed time range, and the
    guid is derived from that date and the idea's rank so that re-running
    the same snapshot yields the same feed.
    """
    built_at = built_at or datetime.now(timezone.utc)

    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = title or FEED_TITLE
    ET.SubElement(channel, "description").text = FEED_DESCRIPTION
    ET.SubElement(channel, "link").text = FEED_LINK
    ET.SubElement(channel, "lastBuildDate").text = _rfc822(built_at)
    ET.SubElement(channel, "generator").text = FEED_GENERATOR

    stamp = "capture"
    if result.time_range is not None:
        stamp = result.time_range.end.strftime("%Y%m%d%H%M")

    for rank, idea in enumerate(result.ideas, start=1):
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = idea.title
        ET.SubElement(item, "description").text = _item_description(idea)
        if result.time_range is not None:
            ET.SubElement(item, "pubDate").text = _rfc822(result.time_range.end)
        guid = ET.SubElement(item, "guid", isPermaLink="false")
        guid.text = f"siphon-idea-{stamp}-{rank}"
        ET.SubElement(item, "category").text = idea.suggested_format.value

    return rss


def format_rss(
    result: AnalysisResult,
    title: str | None = None,
    built_at: datetime | None = None,
) -> str:
    """Serialize the feed as an indented UTF-8 XML document."""
    rss = build_feed(result, title=title, built_at=built_at)
    ET.indent(rss)
    body = ET.tostring(rss, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
