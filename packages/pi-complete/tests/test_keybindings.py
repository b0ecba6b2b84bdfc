"""Tests for pi.complete.keybindings -- key to command resolution."""

from __future__ import annotations

import pytest

from pi.complete.keybindings import (
    DEFAULT_AUTOCOMPLETE_KEYBINDINGS,
    AutocompleteKeybindingsManager,
    normalize_key_id,
)


class TestNormalizeKeyId:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("Tab", "tab"),
            ("Enter", "enter"),
            ("ArrowUp", "up"),
            ("ArrowDown", "down"),
            ("Backspace", "backspace"),
            (" ", "space"),
            ("Ctrl+Z", "ctrl+z"),
            ("tab", "tab"),
            ("A", "A"),
            ("a", "a"),
        ],
    )
    def test_normalize(self, key: str, expected: str) -> None:
        assert normalize_key_id(key) == expected


class TestDefaults:
    def test_has_all_actions(self) -> None:
        assert set(DEFAULT_AUTOCOMPLETE_KEYBINDINGS) == {
            "autocomplete",
            "prevSuggestion",
            "nextSuggestion",
        }

    def test_accept_keys(self) -> None:
        kb = AutocompleteKeybindingsManager()
        assert kb.get_keys("autocomplete") == ["tab", "enter"]
        assert kb.matches("Tab", "autocomplete")
        assert kb.matches("enter", "autocomplete")
        assert not kb.matches("space", "autocomplete")


class TestResolve:
    """Commands resolve only while their precondition holds."""

    def test_accept_requires_match(self) -> None:
        kb = AutocompleteKeybindingsManager()
        assert kb.resolve("tab", match_active=True, selection_active=False) == "autocomplete"
        assert kb.resolve("tab", match_active=False, selection_active=False) == "tab"

    def test_navigation_requires_selection(self) -> None:
        kb = AutocompleteKeybindingsManager()
        assert kb.resolve("ArrowUp", match_active=True, selection_active=True) == "prev-suggestion"
        assert kb.resolve("ArrowDown", match_active=True, selection_active=True) == "next-suggestion"
        assert kb.resolve("ArrowDown", match_active=True, selection_active=False) == "down"

    def test_other_keys_fall_through(self) -> None:
        kb = AutocompleteKeybindingsManager()
        assert kb.resolve("x", match_active=True, selection_active=True) == "x"
        assert kb.resolve("Escape", match_active=True, selection_active=True) == "escape"


class TestOverrides:
    def test_override_replaces_default(self) -> None:
        kb = AutocompleteKeybindingsManager({"autocomplete": "ctrl+space"})
        assert kb.get_keys("autocomplete") == ["ctrl+space"]
        assert kb.resolve("Ctrl+Space", match_active=True, selection_active=False) == "autocomplete"
        assert kb.resolve("tab", match_active=True, selection_active=False) == "tab"

    def test_set_config_rebuilds(self) -> None:
        kb = AutocompleteKeybindingsManager({"nextSuggestion": "ctrl+n"})
        kb.set_config({})
        assert kb.get_keys("nextSuggestion") == ["down"]

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ValueError):
            AutocompleteKeybindingsManager({"explode": "x"})  # type: ignore[dict-item]
