"""Tests for topic detection."""

from datetime import datetime, timezone

import pytest

from siphon.analyzers.topics import (
    GENERAL,
    RESEARCH,
    TOPIC_KEYWORDS,
    TOPIC_PATTERNS,
    detect_topic,
    topic_for_command,
)
from siphon.models import (
    BrowserEvent,
    BrowserPayload,
    EditorEvent,
    EditorPayload,
    FilesystemEvent,
    GitEvent,
    GitPayload,
    ShellEvent,
    ShellPayload,
)

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _shell(command: str) -> ShellEvent:
    return ShellEvent(id="s1", timestamp=NOW, payload=ShellPayload(command=command))


def _browser(domain: str = "", title: str = "", category: str | None = None) -> BrowserEvent:
    return BrowserEvent(
        id="b1",
        timestamp=NOW,
        payload=BrowserPayload(
            url=f"https://{domain or 'example.org'}/page",
            title=title,
            domain=domain,
            category=category,
        ),
    )


def _editor(file_path: str) -> EditorEvent:
    return EditorEvent(
        id="e1",
        timestamp=NOW,
        payload=EditorPayload(action="save", file_path=file_path),
    )


class TestTopicForCommand:
    @pytest.mark.parametrize(
        "command, expected",
        [
            ("kubectl get pods", "kubernetes"),
            ("kubectl delete pod x", "kubernetes"),
            ("docker-compose up -d", "docker"),
            ("docker build -t app .", "docker"),
            ("npm test", "testing"),
            ("npm install", "node"),
            ("python -m pytest tests/", "testing"),
            ("cargo build --release", "rust"),
            ("git status", "git"),
            ("terraform plan", "terraform"),
            ("aws s3 ls", "aws"),
            ("psql -U app", "database"),
        ],
    )
    def test_known_topics(self, command: str, expected: str) -> None:
        assert topic_for_command(command) == expected

    def test_matching_is_case_insensitive(self) -> None:
        assert topic_for_command("KUBECTL GET PODS") == "kubernetes"

    def test_patterns_win_over_keywords(self) -> None:
        # "npm" is a node keyword, but the test pattern is checked first
        assert topic_for_command("yarn run test") == "testing"

    def test_keyword_order_decides_ties(self) -> None:
        # Matches both the kubernetes ("service") and docker keyword sets
        assert topic_for_command("docker service ls") == "kubernetes"

    @pytest.mark.parametrize("command", ["ls", "ls -la", "cd src", "pwd", "clear"])
    def test_navigation_commands_are_general(self, command: str) -> None:
        assert topic_for_command(command) == GENERAL

    def test_unknown_command_uses_first_token(self) -> None:
        assert topic_for_command("make build") == "make"

    def test_single_character_token_is_general(self) -> None:
        assert topic_for_command("x --flag") == GENERAL

    def test_empty_command_is_general(self) -> None:
        assert topic_for_command("") == GENERAL
        assert topic_for_command("   ") == GENERAL


class TestTables:
    def test_tables_are_ordered_tuples(self) -> None:
        assert isinstance(TOPIC_PATTERNS, tuple)
        assert isinstance(TOPIC_KEYWORDS, tuple)

    def test_keyword_topic_order(self) -> None:
        topics = [topic for topic, _ in TOPIC_KEYWORDS]
        assert topics[:3] == ["kubernetes", "docker", "git"]
        assert topics.index("python") < topics.index("testing")


class TestDetectTopic:
    def test_shell_event(self) -> None:
        assert detect_topic(_shell("kubectl get pods")) == "kubernetes"

    def test_browser_domain_lookup(self) -> None:
        assert detect_topic(_browser(domain="docs.python.org", title="Anything")) == "python"

    def test_browser_domain_strips_www(self) -> None:
        assert detect_topic(_browser(domain="www.python.org")) == "python"

    def test_browser_category_after_domain(self) -> None:
        event = _browser(domain="example.org", title="Kubernetes", category="Documentation")
        assert detect_topic(event) == "documentation"

    def test_browser_title_pattern(self) -> None:
        event = _browser(domain="stackoverflow.com", title="How to read a stack trace")
        assert detect_topic(event) == "debugging"

    def test_browser_title_keyword(self) -> None:
        event = _browser(domain="stackoverflow.com", title="Pod stuck in CrashLoopBackOff")
        assert detect_topic(event) == "kubernetes"

    def test_browser_falls_back_to_research(self) -> None:
        event = _browser(domain="example.org", title="Cooking recipes")
        assert detect_topic(event) == RESEARCH

    def test_editor_extension(self) -> None:
        assert detect_topic(_editor("src/app.py")) == "python"
        assert detect_topic(_editor("lib/Main.RS")) == "rust"

    def test_editor_windows_path(self) -> None:
        assert detect_topic(_editor("C:\\work\\infra\\main.tf")) == "terraform"

    def test_editor_unknown_extension_is_general(self) -> None:
        assert detect_topic(_editor("README")) == GENERAL
        assert detect_topic(_editor("notes.xyz")) == GENERAL

    def test_git_event_is_general(self) -> None:
        event = GitEvent(id="g1", timestamp=NOW, payload=GitPayload(action="commit"))
        assert detect_topic(event) == GENERAL

    def test_filesystem_event_is_general(self) -> None:
        event = FilesystemEvent(
            id="f1",
            timestamp=NOW,
            payload=EditorPayload(action="modify", file_path="app.py"),
        )
        assert detect_topic(event) == GENERAL
