"""Unified configuration loaded from .siphon.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from siphon.analyzers.clustering import CLUSTER_GAP_MINUTES
from siphon.analyzers.sessions import SESSION_GAP_MINUTES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".siphon.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "siphon" / "config.toml"

OUTPUT_FORMATS = ("table", "markdown", "notion", "daily", "json", "rss", "prompt")


class AnalysisSectionConfig(BaseModel):
    """[analysis] section."""

    cluster_gap_minutes: int = Field(default=CLUSTER_GAP_MINUTES, gt=0)
    session_gap_minutes: int = Field(default=SESSION_GAP_MINUTES, gt=0)

    @model_validator(mode="after")
    def _cluster_gap_within_session_gap(self) -> AnalysisSectionConfig:
        # A cluster must never straddle a session break
        if self.cluster_gap_minutes > self.session_gap_minutes:
            raise ValueError(
                f"cluster_gap_minutes ({self.cluster_gap_minutes}) must not exceed "
                f"session_gap_minutes ({self.session_gap_minutes})"
            )
        return self


class OutputConfig(BaseModel):
    """[output] section."""

    directory: str = "./siphon-output"
    format: str = "table"
    include_analysis: bool = False


class SiphonConfig(BaseModel):
    """Top-level configuration model."""

    analysis: AnalysisSectionConfig = Field(default_factory=AnalysisSectionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path | None = None) -> SiphonConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .siphon.toml in CWD
    3. ~/.config/siphon/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiphonConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SiphonConfig.model_validate(data) if data else SiphonConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SiphonConfig, **cli_kwargs: object) -> SiphonConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``output_directory``,
            ``output_format``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "output_directory": ("output", "directory"),
        "output_format": ("output", "format"),
        "include_analysis": ("output", "include_analysis"),
        "cluster_gap_minutes": ("analysis", "cluster_gap_minutes"),
        "session_gap_minutes": ("analysis", "session_gap_minutes"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return SiphonConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiphonConfig) -> SiphonConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SIPHON_OUTPUT_DIR": ("output", "directory"),
        "SIPHON_OUTPUT_FORMAT": ("output", "format"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    # Integer-valued env vars
    for env_var, field in [
        ("SIPHON_CLUSTER_GAP_MINUTES", "cluster_gap_minutes"),
        ("SIPHON_SESSION_GAP_MINUTES", "session_gap_minutes"),
    ]:
        raw = os.environ.get(env_var)
        if raw is None:
            continue
        try:
            data["analysis"][field] = int(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", env_var, raw)

    return SiphonConfig.model_validate(data)
