"""Suggestion sources: turn a partial token into candidate completions."""

from __future__ import annotations

from typing import Protocol, Sequence

MAX_SUGGESTIONS = 4

DEFAULT_VOCABULARY: tuple[str, ...] = (
    "getSelection",
    "getAnchorKey",
    "getEntityAt",
    "getAnchorOffset",
    "getText",
    "getBoundingClientRect",
    "getLastCreatedEntityKey",
    "findEntityRanges",
)


class SuggestionSource(Protocol):
    """Protocol for suggestion providers."""

    def suggest(self, partial: str) -> list[str]:
        """Return candidates for *partial*, most relevant first.

        An empty *partial* must produce no candidates.
        """
        ...


class PrefixSuggestionSource:
    """Case-sensitive prefix filter over a fixed vocabulary.

    Keeps the vocabulary's order and does not deduplicate.
    """

    def __init__(
        self,
        vocabulary: Sequence[str] = DEFAULT_VOCABULARY,
        max_suggestions: int = MAX_SUGGESTIONS,
    ) -> None:
        if max_suggestions < 1:
            raise ValueError(f"max_suggestions must be at least 1, got {max_suggestions}")
        self._vocabulary = tuple(vocabulary)
        self._max_suggestions = max_suggestions

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary

    @property
    def max_suggestions(self) -> int:
        return self._max_suggestions

    def suggest(self, partial: str) -> list[str]:
        if not partial:
            return []
        matches = [word for word in self._vocabulary if word.startswith(partial)]
        return matches[: self._max_suggestions]
