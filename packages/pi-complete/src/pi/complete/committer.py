"""Replace a resolved match with an immutable entity holding the completion."""

from __future__ import annotations

import logging

from pi.complete.document import IMMUTABLE, TOKEN, EditorState, EntityMutability, Selection
from pi.complete.scanner import MatchSpan
from pi.complete.selector import SuggestionList

logger = logging.getLogger(__name__)


def resolve_choice(match: MatchSpan, suggestions: SuggestionList) -> str:
    """The highlighted suggestion, or the typed partial text when none is selected."""
    selected = suggestions.selected
    return selected if selected is not None else match.partial_text


def commit(
    state: EditorState,
    match: MatchSpan | None,
    chosen_text: str,
    *,
    kind: str = TOKEN,
    mutability: EntityMutability = IMMUTABLE,
) -> EditorState:
    """Produce the next state with ``[trigger_start, match_end)`` replaced by an entity.

    The cursor ends up collapsed right after the inserted text. With no
    match the given state is returned untouched.
    """
    if match is None:
        return state

    document, entity_key = state.document.create_entity(kind, mutability)
    document = document.replace_text(
        match.block_key,
        match.trigger_start,
        match.match_end,
        chosen_text,
        entity_key=entity_key,
    )
    cursor = match.trigger_start + len(chosen_text)
    logger.debug(
        "Committed %r as entity %s in block %s [%d, %d)",
        chosen_text,
        entity_key,
        match.block_key,
        match.trigger_start,
        match.match_end,
    )
    return state.push(document, Selection.collapsed(match.block_key, cursor))
