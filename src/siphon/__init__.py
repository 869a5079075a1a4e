"""Siphon - turn developer activity into clusters, scores and content ideas."""

__version__ = "0.1.0"
