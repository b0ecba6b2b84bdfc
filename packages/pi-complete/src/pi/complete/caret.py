"""Advisory screen anchor for the suggestion dropdown."""

from __future__ import annotations

from dataclasses import dataclass

from pi.complete.document import EditorState
from pi.complete.text_width import visible_width


@dataclass(frozen=True)
class CaretHint:
    """Terminal cell just below the cursor: ``row`` is 0-based, ``column`` in cells."""

    row: int
    column: int


def caret_hint_for(state: EditorState) -> CaretHint | None:
    """Anchor the dropdown one row below the selection anchor.

    Returns None for a range selection or when the anchor does not point
    into a block of the document.
    """
    selection = state.selection
    if not selection.is_collapsed:
        return None
    block = state.document.find_block(selection.anchor_key)
    if block is None or not 0 <= selection.anchor_offset <= len(block.text):
        return None
    row = state.document.block_index(block.key) + 1
    return CaretHint(row=row, column=visible_width(block.text[: selection.anchor_offset]))
