"""pi-complete: trigger-based autocomplete that commits completions as immutable entities."""

# Document model
from pi.complete.document import (
    IMMUTABLE,
    TOKEN,
    Block,
    Document,
    EditorState,
    Entity,
    Selection,
)

# Trigger scanning
from pi.complete.scanner import DEFAULT_TRIGGER, MatchSpan, scan, scan_state

# Suggestions
from pi.complete.source import (
    DEFAULT_VOCABULARY,
    MAX_SUGGESTIONS,
    PrefixSuggestionSource,
    SuggestionSource,
)
from pi.complete.selector import SuggestionList

# Commit
from pi.complete.committer import commit, resolve_choice

# Keybindings
from pi.complete.keybindings import (
    DEFAULT_AUTOCOMPLETE_KEYBINDINGS,
    AutocompleteKeybindingsManager,
    normalize_key_id,
)

# Session and collaborators
from pi.complete.caret import CaretHint, caret_hint_for
from pi.complete.config import AutocompleteConfig, load_config
from pi.complete.dropdown import SuggestionDropdown, render_block
from pi.complete.host import HeadlessEditor
from pi.complete.session import AutocompleteSession, SessionSnapshot

__all__ = [
    # Document
    "IMMUTABLE",
    "TOKEN",
    "Block",
    "Document",
    "EditorState",
    "Entity",
    "Selection",
    # Scanner
    "DEFAULT_TRIGGER",
    "MatchSpan",
    "scan",
    "scan_state",
    # Suggestions
    "DEFAULT_VOCABULARY",
    "MAX_SUGGESTIONS",
    "PrefixSuggestionSource",
    "SuggestionSource",
    "SuggestionList",
    # Commit
    "commit",
    "resolve_choice",
    # Keybindings
    "DEFAULT_AUTOCOMPLETE_KEYBINDINGS",
    "AutocompleteKeybindingsManager",
    "normalize_key_id",
    # Session
    "AutocompleteConfig",
    "AutocompleteSession",
    "CaretHint",
    "HeadlessEditor",
    "SessionSnapshot",
    "SuggestionDropdown",
    "caret_hint_for",
    "load_config",
    "render_block",
]
