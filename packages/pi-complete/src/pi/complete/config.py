"""Autocomplete configuration. Stored as JSON at ~/.pi/autocomplete.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pi.complete.document import IMMUTABLE, TOKEN, EntityMutability
from pi.complete.keybindings import AutocompleteKeybindingsConfig, AutocompleteKeybindingsManager
from pi.complete.scanner import DEFAULT_TRIGGER
from pi.complete.source import DEFAULT_VOCABULARY, MAX_SUGGESTIONS, PrefixSuggestionSource

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "autocomplete.json"


def default_config_path() -> Path:
    return Path(os.environ.get("PI_CONFIG_DIR", Path.home() / ".pi")) / CONFIG_FILE_NAME


@dataclass
class AutocompleteConfig:
    """Autocomplete settings."""

    trigger: str = DEFAULT_TRIGGER
    max_suggestions: int = MAX_SUGGESTIONS
    vocabulary: tuple[str, ...] = DEFAULT_VOCABULARY
    keybindings: AutocompleteKeybindingsConfig = field(default_factory=dict)
    entity_kind: str = TOKEN
    entity_mutability: EntityMutability = IMMUTABLE
    load_error: Exception | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.trigger:
            raise ValueError("trigger must not be empty")
        if self.max_suggestions < 1:
            raise ValueError(f"max_suggestions must be at least 1, got {self.max_suggestions}")
        self.vocabulary = tuple(self.vocabulary)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AutocompleteConfig:
        """Build a config from camelCase JSON data; missing keys keep defaults.

        Values of the wrong JSON type raise ValueError.
        """
        kwargs: dict[str, Any] = {}
        if "trigger" in data:
            trigger = data["trigger"]
            if not isinstance(trigger, str):
                raise ValueError(f"trigger must be a string, got {trigger!r}")
            kwargs["trigger"] = trigger
        if "maxSuggestions" in data:
            max_suggestions = data["maxSuggestions"]
            # bool is an int subclass
            if not isinstance(max_suggestions, int) or isinstance(max_suggestions, bool):
                raise ValueError(f"maxSuggestions must be an integer, got {max_suggestions!r}")
            kwargs["max_suggestions"] = max_suggestions
        if "vocabulary" in data:
            vocabulary = data["vocabulary"]
            if not isinstance(vocabulary, list) or not all(isinstance(w, str) for w in vocabulary):
                raise ValueError(f"vocabulary must be a list of strings, got {vocabulary!r}")
            kwargs["vocabulary"] = tuple(vocabulary)
        if "keybindings" in data:
            keybindings = data["keybindings"]
            if not isinstance(keybindings, dict):
                raise ValueError(f"keybindings must be an object, got {keybindings!r}")
            kwargs["keybindings"] = dict(keybindings)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "trigger": self.trigger,
            "maxSuggestions": self.max_suggestions,
            "vocabulary": list(self.vocabulary),
            "keybindings": dict(self.keybindings),
        }

    def create_source(self) -> PrefixSuggestionSource:
        return PrefixSuggestionSource(self.vocabulary, self.max_suggestions)

    def create_keybindings(self) -> AutocompleteKeybindingsManager:
        return AutocompleteKeybindingsManager(self.keybindings)


def load_config(path: str | Path | None = None) -> AutocompleteConfig:
    """Load configuration from *path* (default ``~/.pi/autocomplete.json``).

    A missing file gives the defaults. An unreadable or malformed file also
    gives the defaults, with the error logged and kept on ``load_error``.
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        return AutocompleteConfig()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read autocomplete config %s: %s", config_path, e)
        return AutocompleteConfig(load_error=e)
    if not isinstance(data, dict):
        error = ValueError(f"Expected a JSON object in {config_path}")
        logger.warning("Failed to read autocomplete config %s: %s", config_path, error)
        return AutocompleteConfig(load_error=error)
    return AutocompleteConfig.from_dict(data)


def save_config(config: AutocompleteConfig, path: str | Path | None = None) -> None:
    config_path = Path(path) if path is not None else default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
