"""Configuration loading and management for the correction engine.

Settings live in a single JSON file inside the engine's data directory.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from correction_engine.errors import ConfigurationError
from correction_engine.storage import atomic_write_json

ENV_HOME = "CORRECTION_ENGINE_HOME"
SETTINGS_FILE = "settings.json"


class PipelineOptions(BaseModel):
    """Stage toggles for the text normalization pipeline.

    Built once per call and never mutated while a transcript is processed.
    """

    model_config = ConfigDict(frozen=True)

    # Reject recognizer artifacts (credits, subtitle boilerplate, repetition loops)
    hallucination_filter: bool = True
    # Apply the locale's built-in word-correction dictionary (e.g. "degil" -> "değil")
    locale_repair: bool = True
    # Leave words on the loanword allowlist untouched during locale repair
    preserve_loanwords: bool = True
    # Terminal punctuation and heuristic sentence splitting
    auto_punctuation: bool = True
    # Comma before connective words; only meaningful with auto_punctuation
    auto_comma: bool = True
    # Sentence-initial capitals with locale-aware case mapping
    auto_capitalization: bool = True
    # Join sentences with newlines instead of spaces
    paragraph_break: bool = False


class EngineSettings(BaseModel):
    """Top-level engine settings."""

    # Recognizer language code used when none is given explicitly
    language: str = "tr"
    pipeline: PipelineOptions = Field(default_factory=PipelineOptions)
    # Run the status recalculation + purge sweep every N transcriptions
    maintenance_interval: int = Field(default=100, ge=1)
    # Hard cap for the recognizer priming prompt, in characters
    max_prompt_length: int = Field(default=500, ge=50)
    # Recent processed transcripts kept for domain detection
    history_size: int = Field(default=100, ge=1)


def get_data_dir() -> Path:
    """Get the directory holding settings and persisted snapshots.

    Honours ``CORRECTION_ENGINE_HOME``; defaults to ``~/.correction-engine``.
    """
    override = os.environ.get(ENV_HOME)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".correction-engine"


def load_settings(path: Path | None = None) -> EngineSettings:
    """Load settings from JSON, falling back to defaults when absent.

    Args:
        path: Settings file (defaults to ``<data dir>/settings.json``)

    Returns:
        EngineSettings

    Raises:
        ConfigurationError: If the file exists but cannot be parsed
    """
    path = path or get_data_dir() / SETTINGS_FILE
    if not path.exists():
        return EngineSettings()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return EngineSettings.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid settings file: {e}", context={"path": str(path)}) from e


def save_settings(settings: EngineSettings, path: Path | None = None) -> Path:
    """Save settings to JSON with an atomic write.

    Args:
        settings: Settings to save
        path: Target file (defaults to ``<data dir>/settings.json``)

    Returns:
        Path to the saved settings file
    """
    path = path or get_data_dir() / SETTINGS_FILE
    atomic_write_json(path, settings.model_dump(mode="json"))
    return path
