"""Loaders that turn collector snapshots into events."""

from siphon.parsers.events import load_events, parse_events

__all__ = ["load_events", "parse_events"]
