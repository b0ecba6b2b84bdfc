"""Suggestion list with a clamped highlighted index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from pi.complete.scanner import MatchSpan
from pi.complete.source import MAX_SUGGESTIONS, SuggestionSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionList:
    """Candidates in relevance order plus the highlighted index.

    ``selected_index`` is None exactly when there are no suggestions.
    Navigation returns a new list; the index clamps at both ends.
    """

    suggestions: tuple[str, ...] = ()
    selected_index: int | None = None

    def __post_init__(self) -> None:
        if not self.suggestions:
            if self.selected_index is not None:
                raise ValueError("selected_index must be None for an empty list")
        elif self.selected_index is None or not 0 <= self.selected_index < len(self.suggestions):
            raise ValueError(
                f"selected_index {self.selected_index} out of range for "
                f"{len(self.suggestions)} suggestions"
            )

    @classmethod
    def empty(cls) -> SuggestionList:
        return cls()

    @classmethod
    def for_match(
        cls,
        match: MatchSpan | None,
        source: SuggestionSource,
        max_suggestions: int = MAX_SUGGESTIONS,
    ) -> SuggestionList:
        """Recompute suggestions for *match* from scratch."""
        if match is None:
            return cls.empty()

        candidates = list(source.suggest(match.partial_text))
        if len(candidates) > max_suggestions:
            logger.warning(
                "Suggestion source returned %d candidates for %r, truncating to %d",
                len(candidates),
                match.partial_text,
                max_suggestions,
            )
            candidates = candidates[:max_suggestions]

        if not candidates:
            return cls.empty()
        return cls(suggestions=tuple(candidates), selected_index=0)

    @property
    def is_active(self) -> bool:
        return self.selected_index is not None

    @property
    def selected(self) -> str | None:
        if self.selected_index is None:
            return None
        return self.suggestions[self.selected_index]

    def move_up(self) -> SuggestionList:
        if self.selected_index is None:
            return self
        return replace(self, selected_index=max(self.selected_index - 1, 0))

    def move_down(self) -> SuggestionList:
        if self.selected_index is None:
            return self
        return replace(
            self,
            selected_index=min(self.selected_index + 1, len(self.suggestions) - 1),
        )

    def __len__(self) -> int:
        return len(self.suggestions)
