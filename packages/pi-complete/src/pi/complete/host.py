"""Headless host editor driving an AutocompleteSession.

Stands in for a real editor widget: applies typed text and editing keys to
an ``EditorState``, keeps an undo stack of previous states and routes key
presses through the session's binding/command protocol first.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from pi.complete.document import IMMUTABLE, EditorState
from pi.complete.keybindings import HANDLED
from pi.complete.session import AutocompleteSession

logger = logging.getLogger(__name__)

S = TypeVar("S")

_AUTOCOMPLETE_COMMANDS = frozenset({"autocomplete", "prev-suggestion", "next-suggestion"})


class UndoStack(Generic[S]):
    """Bounded stack of immutable snapshots; the oldest entries drop off first."""

    def __init__(self, max_depth: int = 100) -> None:
        self._stack: list[S] = []
        self._max_depth = max_depth

    def push(self, state: S) -> None:
        self._stack.append(state)
        if len(self._stack) > self._max_depth:
            del self._stack[0]

    def pop(self) -> S | None:
        return self._stack.pop() if self._stack else None

    def clear(self) -> None:
        self._stack.clear()

    @property
    def length(self) -> int:
        return len(self._stack)


class HeadlessEditor:
    """Minimal single-caret editor wired to an autocomplete session."""

    def __init__(self, session: AutocompleteSession | None = None) -> None:
        self.session = session if session is not None else AutocompleteSession()
        self.session.on_commit = self._on_commit
        self._state = self.session.state
        self._undo: UndoStack[EditorState] = UndoStack()

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def undo_depth(self) -> int:
        return self._undo.length

    def get_text(self) -> str:
        return self._state.document.get_plain_text()

    # --- State adoption ---

    def _on_commit(self, state: EditorState) -> None:
        self._undo.push(self._state)
        self._state = state

    def _apply(self, state: EditorState, *, record: bool = True) -> None:
        if record:
            self._undo.push(self._state)
        self._state = state
        self.session.handle_change(state)

    # --- Input ---

    def type_text(self, text: str) -> None:
        """Type *text* one character at a time, newlines split blocks."""
        for char in text:
            self.press("enter" if char == "\n" else char)

    def press(self, key: str) -> str:
        """Handle one key press; returns the command or default binding it resolved to."""
        command = self.session.key_binding(key)
        if command in _AUTOCOMPLETE_COMMANDS and self.session.handle_key_command(command) == HANDLED:
            return command
        self._default_key(command)
        return command

    def _default_key(self, key: str) -> None:
        if key == "space":
            self._insert(" ")
        elif len(key) == 1 and key.isprintable():
            self._insert(key)
        elif key == "backspace":
            self._backspace()
        elif key == "enter":
            self._split()
        elif key in ("left", "right", "up", "down", "home", "end"):
            self._move(key)
        elif key == "ctrl+z":
            self.undo()
        else:
            logger.debug("Ignoring key %r", key)

    def undo(self) -> None:
        previous = self._undo.pop()
        if previous is not None:
            self._apply(previous, record=False)

    # --- Editing primitives ---

    def _cursor(self) -> tuple[str, int]:
        selection = self._state.selection
        return selection.anchor_key, selection.anchor_offset

    def _insert(self, text: str) -> None:
        block_key, offset = self._cursor()
        document = self._state.document.replace_text(block_key, offset, offset, text)
        self._apply(self._state.push(document).with_cursor(block_key, offset + len(text)))

    def _backspace(self) -> None:
        block_key, offset = self._cursor()
        if offset == 0:
            return
        block = self._state.document.get_block(block_key)
        start = offset - 1
        end = offset
        entity_key = block.get_entity_at(start)
        if entity_key is not None and self._state.document.get_entity(entity_key).mutability == IMMUTABLE:
            for range_start, range_end, key in block.find_entity_ranges():
                if key == entity_key and range_start <= start < range_end:
                    start, end = range_start, range_end
                    break
        document = self._state.document.replace_text(block_key, start, end, "")
        self._apply(self._state.push(document).with_cursor(block_key, start))

    def _split(self) -> None:
        block_key, offset = self._cursor()
        document, new_key = self._state.document.split_block(block_key, offset)
        self._apply(self._state.push(document).with_cursor(new_key, 0))

    def _move(self, key: str) -> None:
        block_key, offset = self._cursor()
        document = self._state.document
        index = document.block_index(block_key)
        block = document.blocks[index]
        if key == "left":
            offset = max(offset - 1, 0)
        elif key == "right":
            offset = min(offset + 1, len(block.text))
        elif key == "home":
            offset = 0
        elif key == "end":
            offset = len(block.text)
        else:
            index = max(index - 1, 0) if key == "up" else min(index + 1, len(document.blocks) - 1)
            block = document.blocks[index]
            offset = min(offset, len(block.text))
        self._apply(self._state.with_cursor(block.key, offset), record=False)
