"""Developer-activity event models.

An event is immutable once the collector layer produces it. The payload is a
tagged union keyed by ``source``: each source has its own event class, and
``Event`` is the discriminated union of all of them. Readers dispatch on the
event class (or ``source``) instead of casting the payload.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Any, Literal
from urllib.parse import urlparse

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class EventSource(StrEnum):
    """Where an event was captured."""

    SHELL = "shell"
    EDITOR = "editor"
    FILESYSTEM = "filesystem"
    GIT = "git"
    BROWSER = "browser"


class _Frozen(BaseModel):
    """Immutable model that also accepts the collectors' camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── payloads ─────────────────────────────────────────────────────────


class ShellPayload(_Frozen):
    """A finished shell command."""

    command: str
    exit_code: int = 0
    duration_ms: int = 0
    cwd: str = ""
    git_branch: str | None = None

    @property
    def failed(self) -> bool:
        return self.exit_code != 0


class EditorPayload(_Frozen):
    """A file-level action from an editor or the filesystem watcher."""

    action: str
    file_path: str
    language: str | None = None
    lines_changed: int | None = None


class GitPayload(_Frozen):
    """A git operation (commit, checkout, merge, ...)."""

    action: str
    branch: str | None = None
    message: str | None = None
    files_changed: int | None = None


class BrowserPayload(_Frozen):
    """A page visit read from browser history."""

    url: str
    title: str = ""
    visit_count: int = 1
    browser: str = "chrome"
    domain: str = ""
    category: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_domain(cls, data: Any) -> Any:
        """Fill an empty domain from the URL host."""
        if not isinstance(data, dict) or data.get("domain"):
            return data
        url = data.get("url")
        if isinstance(url, str):
            host = urlparse(url).hostname
            if host:
                data = {**data, "domain": host}
        return data


# ── events ───────────────────────────────────────────────────────────


class _BaseEvent(_Frozen):
    id: str
    timestamp: datetime
    event_type: str = ""
    project: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        # Collectors may omit the offset; treat those timestamps as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ShellEvent(_BaseEvent):
    source: Literal["shell"] = "shell"
    payload: ShellPayload = Field(validation_alias=AliasChoices("payload", "data"))


class EditorEvent(_BaseEvent):
    source: Literal["editor"] = "editor"
    payload: EditorPayload = Field(validation_alias=AliasChoices("payload", "data"))


class FilesystemEvent(_BaseEvent):
    source: Literal["filesystem"] = "filesystem"
    payload: EditorPayload = Field(validation_alias=AliasChoices("payload", "data"))


class GitEvent(_BaseEvent):
    source: Literal["git"] = "git"
    payload: GitPayload = Field(validation_alias=AliasChoices("payload", "data"))


class BrowserEvent(_BaseEvent):
    source: Literal["browser"] = "browser"
    payload: BrowserPayload = Field(validation_alias=AliasChoices("payload", "data"))


Event = Annotated[
    ShellEvent | EditorEvent | FilesystemEvent | GitEvent | BrowserEvent,
    Field(discriminator="source"),
]


def shell_events(events: list[Event]) -> list[ShellEvent]:
    """Return only the shell events, preserving order."""
    return [e for e in events if isinstance(e, ShellEvent)]
