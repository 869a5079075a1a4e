"""Analysis stages for developer-activity events.

Stages run strictly forward: topics feed clustering, clusters are scored,
sessions group the same events at a coarser grain, and ideas and the
summary are derived from everything before them.
"""

from siphon.analyzers.clustering import cluster_events
from siphon.analyzers.ideas import generate_content_ideas, rank_ideas
from siphon.analyzers.scoring import aha_index, score_cluster, struggle_score
from siphon.analyzers.sessions import segment_sessions
from siphon.analyzers.signals import detect_learning_signals
from siphon.analyzers.summary import summarize
from siphon.analyzers.topics import detect_topic, topic_for_command

__all__ = [
    "aha_index",
    "cluster_events",
    "detect_learning_signals",
    "detect_topic",
    "generate_content_ideas",
    "rank_ideas",
    "score_cluster",
    "segment_sessions",
    "struggle_score",
    "summarize",
    "topic_for_command",
]
