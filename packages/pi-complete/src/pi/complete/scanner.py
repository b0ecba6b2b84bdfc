"""Trigger detection: find the trigger token and partial text before the cursor."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pi.complete.document import Document, EditorState

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER = "<>"


@dataclass(frozen=True)
class MatchSpan:
    """A trigger plus partial text ending at the cursor, within one block."""

    block_key: str
    trigger_start: int
    match_start: int
    match_end: int
    trigger_text: str
    partial_text: str

    @property
    def match_string(self) -> str:
        """The full replaced span: trigger followed by the partial text."""
        return self.trigger_text + self.partial_text


def scan(
    document: Document,
    block_key: str,
    cursor_offset: int,
    trigger: str = DEFAULT_TRIGGER,
) -> MatchSpan | None:
    """Walk backward from the cursor looking for *trigger*.

    Characters tagged with an entity stop the walk: a trigger can neither
    start inside nor reach past an existing entity. Returns None when the
    block start or an entity is reached without finding the trigger.
    """
    if not trigger:
        return None
    block = document.find_block(block_key)
    if block is None or not 0 <= cursor_offset <= len(block.text):
        return None

    text = block.text
    cursor = cursor_offset - 1
    match_string = ""
    while cursor >= 0:
        if block.get_entity_at(cursor) is not None:
            return None
        match_string = text[cursor] + match_string
        if match_string.startswith(trigger):
            return MatchSpan(
                block_key=block_key,
                trigger_start=cursor,
                match_start=cursor + len(trigger),
                match_end=cursor_offset,
                trigger_text=trigger,
                partial_text=match_string[len(trigger) :],
            )
        cursor -= 1
    return None


def scan_state(state: EditorState, trigger: str = DEFAULT_TRIGGER) -> MatchSpan | None:
    """Scan at the selection anchor of *state*."""
    selection = state.selection
    match = scan(state.document, selection.anchor_key, selection.anchor_offset, trigger)
    if match is not None:
        logger.debug(
            "Match in block %s at [%d, %d): %r",
            match.block_key,
            match.trigger_start,
            match.match_end,
            match.partial_text,
        )
    return match
