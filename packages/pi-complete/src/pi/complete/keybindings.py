"""Key binding resolution for autocomplete commands."""

from __future__ import annotations

from typing import Literal

KeyId = str

AutocompleteAction = Literal[
    "autocomplete",
    "prevSuggestion",
    "nextSuggestion",
]

AutocompleteCommand = Literal["autocomplete", "prev-suggestion", "next-suggestion"]
HandleResult = Literal["handled", "not-handled"]

NOT_HANDLED: HandleResult = "not-handled"
HANDLED: HandleResult = "handled"

AutocompleteKeybindingsConfig = dict[AutocompleteAction, KeyId | list[KeyId]]

DEFAULT_AUTOCOMPLETE_KEYBINDINGS: dict[AutocompleteAction, KeyId | list[KeyId]] = {
    "autocomplete": ["tab", "enter"],
    "prevSuggestion": "up",
    "nextSuggestion": "down",
}

ACTION_COMMANDS: dict[AutocompleteAction, AutocompleteCommand] = {
    "autocomplete": "autocomplete",
    "prevSuggestion": "prev-suggestion",
    "nextSuggestion": "next-suggestion",
}

# Browser-style key names mapped onto key ids
_KEY_ALIASES: dict[str, KeyId] = {
    "Tab": "tab",
    "Enter": "enter",
    "Return": "enter",
    "ArrowUp": "up",
    "ArrowDown": "down",
    "ArrowLeft": "left",
    "ArrowRight": "right",
    "Backspace": "backspace",
    "Delete": "delete",
    "Escape": "escape",
    "Home": "home",
    "End": "end",
    " ": "space",
}


def normalize_key_id(key: str) -> KeyId:
    """Normalize a key name to a key id.

    Single printable characters are kept as-is (case matters); named keys
    and modifier combinations are lowercased.
    """
    alias = _KEY_ALIASES.get(key)
    if alias is not None:
        return alias
    if len(key) == 1:
        return key
    return key.lower()


class AutocompleteKeybindingsManager:
    """Maps key ids to autocomplete actions, with user overrides."""

    def __init__(self, config: AutocompleteKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[AutocompleteAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: AutocompleteKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_AUTOCOMPLETE_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = [normalize_key_id(k) for k in key_array]

        for action, keys in config.items():
            if action not in ACTION_COMMANDS:
                raise ValueError(f"Unknown autocomplete action: {action}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = [normalize_key_id(k) for k in key_array]

    def matches(self, key: str, action: AutocompleteAction) -> bool:
        """Check if a key matches a specific action."""
        return normalize_key_id(key) in self._action_to_keys.get(action, [])

    def get_keys(self, action: AutocompleteAction) -> list[KeyId]:
        return self._action_to_keys.get(action, [])

    def set_config(self, config: AutocompleteKeybindingsConfig) -> None:
        self._build_maps(config)

    def resolve(self, key: str, *, match_active: bool, selection_active: bool) -> str:
        """Resolve a key press to a command name.

        Accept keys only resolve while a match is active and navigation keys
        only while a suggestion is highlighted. Anything else falls through
        to the normalized key id, the host's default binding.
        """
        if match_active and self.matches(key, "autocomplete"):
            return ACTION_COMMANDS["autocomplete"]
        if selection_active and self.matches(key, "prevSuggestion"):
            return ACTION_COMMANDS["prevSuggestion"]
        if selection_active and self.matches(key, "nextSuggestion"):
            return ACTION_COMMANDS["nextSuggestion"]
        return normalize_key_id(key)
