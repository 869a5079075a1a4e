"""Learning-signal detection inside a cluster."""

from __future__ import annotations

from collections import Counter

from siphon.models import Event, LearningSignal, SignalType, shell_events

DEBUGGING_MIN_FAILURES = 4
REPEAT_THRESHOLD = 3


def normalize_command(command: str, tokens: int = 2) -> str:
    """Keep the first ``tokens`` whitespace-separated words of a command."""
    return " ".join(command.split()[:tokens])


def detect_learning_signals(events: list[Event]) -> list[LearningSignal]:
    """Flag debugging and trial-and-error exploration in a cluster.

    Only shell events count. More than three failed commands produce a
    debugging signal. Commands are grouped by their first two words; each
    group seen at least three times counts once towards a single
    exploration signal.
    """
    signals: list[LearningSignal] = []
    shell = shell_events(events)

    failed = sum(1 for e in shell if e.payload.failed)
    if failed >= DEBUGGING_MIN_FAILURES:
        signals.append(
            LearningSignal(
                type=SignalType.DEBUGGING,
                description=f"{failed} failed commands indicate troubleshooting",
                intensity=min(failed * 10, 100),
            )
        )

    counts: Counter[str] = Counter(normalize_command(e.payload.command) for e in shell)
    repeated = [cmd for cmd, count in counts.items() if count >= REPEAT_THRESHOLD]
    if repeated:
        signals.append(
            LearningSignal(
                type=SignalType.EXPLORATION,
                description="Repeated commands suggest iterative exploration",
                intensity=min(len(repeated) * 20, 100),
            )
        )

    return signals
