"""JSON export of an analysis result."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from siphon.models import AnalysisResult, Cluster


def _cluster_dict(cluster: Cluster) -> dict[str, Any]:
    return {
        "id": cluster.id,
        "topic": cluster.topic,
        "start_time": cluster.start_time.isoformat(),
        "end_time": cluster.end_time.isoformat(),
        "duration_minutes": cluster.duration_minutes,
        "event_count": cluster.event_count,
        "confidence": cluster.confidence.value,
        "struggle_score": cluster.struggle_score,
        "aha_index": cluster.aha_index,
        "signals": [s.model_dump(mode="json") for s in cluster.signals],
    }


def build_export(
    result: AnalysisResult,
    include_analysis: bool = False,
    exported_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the JSON-ready export structure.

    Clusters and sessions are included only with ``include_analysis``, and
    then reference events by ID instead of embedding them.
    """
    exported_at = exported_at or datetime.now()
    time_range = result.time_range.model_dump(mode="json") if result.time_range else None

    data: dict[str, Any] = {
        "exported_at": exported_at.isoformat(),
        "time_range": time_range,
        "summary": result.summary.model_dump(mode="json"),
        "ideas": [idea.model_dump(mode="json") for idea in result.ideas],
    }

    if include_analysis:
        data["clusters"] = [_cluster_dict(c) for c in result.clusters]
        data["sessions"] = [
            {
                "id": s.id,
                "start_time": s.start_time.isoformat(),
                "end_time": s.end_time.isoformat(),
                "duration_minutes": s.duration_minutes,
                "gap_before_minutes": s.gap_before_minutes,
                "description": s.description,
                "event_ids": [e.id for e in s.events],
                "cluster_ids": [c.id for c in s.clusters],
            }
            for s in result.sessions
        ]

    return data


def format_json(result: AnalysisResult, include_analysis: bool = False) -> str:
    """Serialize an analysis result as indented JSON."""
    return json.dumps(build_export(result, include_analysis), indent=2, ensure_ascii=False)
