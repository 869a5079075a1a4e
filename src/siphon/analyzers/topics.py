"""Topic detection for single events.

Every table here is an ordered tuple: the first matching entry wins, so the
order of entries decides which topic an event gets and, through that, how
events cluster downstream. Reordering a table changes results.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from types import MappingProxyType

from siphon.models import BrowserEvent, EditorEvent, Event, ShellEvent

GENERAL = "general"
RESEARCH = "research"

# ── tables ───────────────────────────────────────────────────────────

# Multi-word patterns, most specific first. Checked before keywords.
TOPIC_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bdocker[- ]compose\b"), "docker"),
    (re.compile(r"\bkubectl\s+\w+"), "kubernetes"),
    (re.compile(r"\bhelm\s+(install|upgrade|template|repo|rollback)\b"), "kubernetes"),
    (re.compile(r"\b(npm|yarn|pnpm)\s+(run\s+)?test\b"), "testing"),
    (re.compile(r"\bpython3?\s+-m\s+(pytest|unittest)\b"), "testing"),
    (re.compile(r"\bcargo\s+(test|nextest)\b"), "testing"),
    (re.compile(r"\bgo\s+test\b"), "testing"),
    (re.compile(r"\bgit\s+(rebase|merge|cherry-pick|bisect|stash|reset)\b"), "git"),
    (re.compile(r"\bterraform\s+(init|plan|apply|destroy|import)\b"), "terraform"),
    (re.compile(r"\baws\s+[\w-]+\s+[\w-]+"), "aws"),
    (re.compile(r"\bstack\s*trace\b"), "debugging"),
)

# Substring keywords per topic; the first topic with any hit wins.
TOPIC_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("kubernetes", ("kubectl", "k8s", "helm", "pod", "deployment", "service", "ingress")),
    ("docker", ("docker", "container", "dockerfile", "compose")),
    ("git", ("git", "commit", "push", "pull", "merge", "rebase", "branch")),
    ("node", ("npm", "node", "yarn", "pnpm", "package.json")),
    ("python", ("python", "pip", "venv", "pytest", "poetry")),
    ("rust", ("cargo", "rustc", "rustup")),
    ("database", ("psql", "mysql", "redis", "mongo", "sqlite")),
    ("aws", ("aws", "s3", "ec2", "lambda", "cloudformation")),
    ("testing", ("test", "jest", "pytest", "mocha", "cypress")),
    ("debugging", ("debug", "log", "error", "trace", "stack")),
)

# Navigation and housekeeping commands carry no topic of their own.
GENERAL_COMMANDS: frozenset[str] = frozenset(
    {
        "cd", "ls", "ll", "la", "pwd", "clear", "cls", "exit", "history",
        "echo", "cat", "less", "more", "man", "which", "whoami", "tree",
        "mkdir", "touch", "cp", "mv", "rm", "open", "source",
    }
)

DOMAIN_TOPICS: MappingProxyType[str, str] = MappingProxyType(
    dict(
        (
            ("kubernetes.io", "kubernetes"),
            ("helm.sh", "kubernetes"),
            ("docker.com", "docker"),
            ("docs.docker.com", "docker"),
            ("hub.docker.com", "docker"),
            ("git-scm.com", "git"),
            ("docs.github.com", "git"),
            ("nodejs.org", "node"),
            ("npmjs.com", "node"),
            ("python.org", "python"),
            ("docs.python.org", "python"),
            ("pypi.org", "python"),
            ("rust-lang.org", "rust"),
            ("doc.rust-lang.org", "rust"),
            ("docs.rs", "rust"),
            ("crates.io", "rust"),
            ("postgresql.org", "database"),
            ("redis.io", "database"),
            ("mongodb.com", "database"),
            ("sqlite.org", "database"),
            ("aws.amazon.com", "aws"),
            ("docs.aws.amazon.com", "aws"),
            ("jestjs.io", "testing"),
            ("docs.pytest.org", "testing"),
            ("cypress.io", "testing"),
            ("terraform.io", "terraform"),
            ("developer.hashicorp.com", "terraform"),
        )
    )
)

EXTENSION_TOPICS: MappingProxyType[str, str] = MappingProxyType(
    dict(
        (
            (".py", "python"),
            (".pyi", "python"),
            (".ipynb", "python"),
            (".rs", "rust"),
            (".js", "node"),
            (".mjs", "node"),
            (".cjs", "node"),
            (".jsx", "node"),
            (".ts", "node"),
            (".tsx", "node"),
            (".go", "go"),
            (".sql", "database"),
            (".tf", "terraform"),
            (".tfvars", "terraform"),
            (".dockerfile", "docker"),
            (".lua", "lua"),
            (".rb", "ruby"),
            (".java", "java"),
            (".kt", "kotlin"),
            (".swift", "swift"),
            (".c", "c"),
            (".h", "c"),
            (".cpp", "cpp"),
            (".hpp", "cpp"),
            (".sh", "shell"),
            (".bash", "shell"),
            (".zsh", "shell"),
        )
    )
)


# ── matching helpers ─────────────────────────────────────────────────


def _match_patterns(text: str) -> str | None:
    for pattern, topic in TOPIC_PATTERNS:
        if pattern.search(text):
            return topic
    return None


def _match_keywords(text: str) -> str | None:
    for topic, keywords in TOPIC_KEYWORDS:
        if any(kw in text for kw in keywords):
            return topic
    return None


def _normalize_domain(domain: str) -> str:
    domain = domain.lower()
    return domain[4:] if domain.startswith("www.") else domain


# ── per-source detectors ─────────────────────────────────────────────


def topic_for_command(command: str) -> str:
    """Resolve a shell command line to a topic."""
    text = command.lower()

    topic = _match_patterns(text) or _match_keywords(text)
    if topic:
        return topic

    tokens = text.split()
    first = tokens[0] if tokens else ""
    if first in GENERAL_COMMANDS:
        return GENERAL
    if len(first) > 1:
        return first
    return GENERAL


def _topic_for_browser(event: BrowserEvent) -> str:
    payload = event.payload
    domain_topic = DOMAIN_TOPICS.get(_normalize_domain(payload.domain))
    if domain_topic:
        return domain_topic
    if payload.category:
        return payload.category.lower()

    title = payload.title.lower()
    return _match_patterns(title) or _match_keywords(title) or RESEARCH


def _topic_for_editor(event: EditorEvent) -> str:
    suffix = PurePosixPath(event.payload.file_path.replace("\\", "/")).suffix.lower()
    return EXTENSION_TOPICS.get(suffix, GENERAL)


def detect_topic(event: Event) -> str:
    """Classify one event into a lowercase topic label.

    Shell commands go through patterns, then keywords, then the first
    command token. Browser visits use the domain, the collector's
    category, then the page title. Editor actions use the file extension.
    Git and filesystem events have no topic of their own and return
    ``"general"``, so they inherit the topic around them when clustered.
    """
    if isinstance(event, ShellEvent):
        return topic_for_command(event.payload.command)
    if isinstance(event, BrowserEvent):
        return _topic_for_browser(event)
    if isinstance(event, EditorEvent):
        return _topic_for_editor(event)
    return GENERAL
