"""Editor session: wires scanning, suggestion selection and commits together.

The session is the single owner of the per-change autocomplete state. Every
document or selection change is fed through ``handle_change``, which
recomputes the match, the suggestion list and the caret hint from scratch
and stores them as one ``SessionSnapshot``.

Key handling follows the host editor's two-step protocol: ``key_binding``
maps a key press to a command name, then ``handle_key_command`` runs it and
reports whether the host should fall back to its default behaviour.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from pi.complete.caret import CaretHint, caret_hint_for
from pi.complete.committer import commit, resolve_choice
from pi.complete.config import AutocompleteConfig
from pi.complete.document import EditorState
from pi.complete.keybindings import (
    HANDLED,
    NOT_HANDLED,
    AutocompleteKeybindingsManager,
    HandleResult,
)
from pi.complete.scanner import MatchSpan, scan_state
from pi.complete.selector import SuggestionList
from pi.complete.source import SuggestionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything derived from one document/selection change."""

    state: EditorState
    match: MatchSpan | None
    suggestions: SuggestionList
    caret: CaretHint | None


class AutocompleteSession:
    """Autocomplete state for one editor."""

    def __init__(
        self,
        state: EditorState | None = None,
        *,
        config: AutocompleteConfig | None = None,
        source: SuggestionSource | None = None,
        keybindings: AutocompleteKeybindingsManager | None = None,
        on_commit: Callable[[EditorState], None] | None = None,
        caret_fn: Callable[[EditorState], CaretHint | None] = caret_hint_for,
    ) -> None:
        self._config = config if config is not None else AutocompleteConfig()
        self._source: SuggestionSource = (
            source if source is not None else self._config.create_source()
        )
        self._keybindings = (
            keybindings if keybindings is not None else self._config.create_keybindings()
        )
        self._caret_fn = caret_fn
        self.on_commit = on_commit
        self._snapshot = self._compute(state if state is not None else EditorState.create())

    # --- Snapshot access ---

    @property
    def config(self) -> AutocompleteConfig:
        return self._config

    @property
    def state(self) -> EditorState:
        return self._snapshot.state

    @property
    def match(self) -> MatchSpan | None:
        return self._snapshot.match

    @property
    def suggestions(self) -> SuggestionList:
        return self._snapshot.suggestions

    @property
    def caret(self) -> CaretHint | None:
        return self._snapshot.caret

    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    # --- Change path ---

    def _compute(self, state: EditorState) -> SessionSnapshot:
        match = scan_state(state, self._config.trigger)
        suggestions = SuggestionList.for_match(match, self._source, self._config.max_suggestions)
        return SessionSnapshot(
            state=state,
            match=match,
            suggestions=suggestions,
            caret=self._caret_fn(state),
        )

    def handle_change(self, state: EditorState) -> SessionSnapshot:
        """Recompute match, suggestions and caret hint for a new state."""
        had_match = self._snapshot.match is not None
        self._snapshot = self._compute(state)
        if had_match and self._snapshot.match is None:
            logger.debug("Match cleared")
        elif self._snapshot.match is not None:
            logger.debug("Suggestions: %s", list(self._snapshot.suggestions.suggestions))
        return self._snapshot

    # --- Key handling ---

    def key_binding(self, key: str) -> str:
        """Map a key press to a command, or to the host's default binding."""
        return self._keybindings.resolve(
            key,
            match_active=self._snapshot.match is not None,
            selection_active=self._snapshot.suggestions.is_active,
        )

    def handle_key_command(self, command: str) -> HandleResult:
        if command == "autocomplete":
            self.autocomplete()
            return HANDLED
        if command == "prev-suggestion" and self._snapshot.suggestions.is_active:
            self._set_suggestions(self._snapshot.suggestions.move_up())
            return HANDLED
        if command == "next-suggestion" and self._snapshot.suggestions.is_active:
            self._set_suggestions(self._snapshot.suggestions.move_down())
            return HANDLED
        return NOT_HANDLED

    def _set_suggestions(self, suggestions: SuggestionList) -> None:
        self._snapshot = replace(self._snapshot, suggestions=suggestions)

    # --- Commit ---

    def autocomplete(self) -> EditorState:
        """Commit the highlighted suggestion (or the typed text) as an entity.

        Returns the new state, or the current one when no match is active.
        The new state is handed to ``on_commit`` and then run through the
        change path, which ends the match.
        """
        match = self._snapshot.match
        if match is None:
            return self._snapshot.state

        chosen = resolve_choice(match, self._snapshot.suggestions)
        new_state = commit(
            self._snapshot.state,
            match,
            chosen,
            kind=self._config.entity_kind,
            mutability=self._config.entity_mutability,
        )
        if self.on_commit:
            self.on_commit(new_state)
        self.handle_change(new_state)
        return new_state
