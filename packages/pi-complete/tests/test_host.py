"""Tests for pi.complete.host -- headless editor driving a session."""

from __future__ import annotations

from pi.complete.host import HeadlessEditor, UndoStack


class TestUndoStack:
    def test_lifo(self) -> None:
        stack: UndoStack[int] = UndoStack()
        stack.push(1)
        stack.push(2)
        assert stack.pop() == 2
        assert stack.pop() == 1
        assert stack.pop() is None

    def test_bounded(self) -> None:
        stack: UndoStack[int] = UndoStack(max_depth=2)
        for i in range(4):
            stack.push(i)
        assert stack.length == 2
        assert stack.pop() == 3
        assert stack.pop() == 2

    def test_clear(self) -> None:
        stack: UndoStack[str] = UndoStack()
        stack.push("a")
        stack.clear()
        assert stack.length == 0


class TestTyping:
    def test_typing_builds_match(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("see <>getA")
        assert editor.get_text() == "see <>getA"
        assert editor.session.match is not None
        assert editor.session.suggestions.suggestions == ("getAnchorKey", "getAnchorOffset")

    def test_newline_splits_block(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("ab\ncd")
        assert [b.text for b in editor.state.document.blocks] == ["ab", "cd"]

    def test_enter_without_match_is_newline(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("ab")
        assert editor.press("Enter") == "enter"
        assert len(editor.state.document.blocks) == 2


class TestAutocompleteFlow:
    def test_navigate_and_accept(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>get")
        assert editor.press("ArrowDown") == "next-suggestion"
        assert editor.press("ArrowDown") == "next-suggestion"
        assert editor.press("Tab") == "autocomplete"
        assert editor.get_text() == "getEntityAt"
        assert editor.state is editor.session.state
        assert editor.session.match is None

    def test_arrow_without_suggestions_moves_cursor(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>zz")
        assert editor.press("ArrowUp") == "up"
        assert editor.state.selection.anchor_offset == 4
        editor.press("ArrowLeft")
        assert editor.state.selection.anchor_offset == 3

    def test_typing_after_entity_does_not_rematch(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>getT")
        editor.press("Tab")
        editor.type_text("x")
        assert editor.get_text() == "getTextx"
        assert editor.session.match is None

    def test_new_trigger_after_entity(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>getT")
        editor.press("Tab")
        editor.type_text(" <>find")
        assert editor.session.suggestions.suggestions == ("findEntityRanges",)
        editor.press("Enter")
        block = editor.state.document.blocks[0]
        assert block.text == "getText findEntityRanges"
        assert [key for _s, _e, key in block.find_entity_ranges()] == ["1", "2"]


class TestEditing:
    def test_backspace_removes_whole_entity(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("a <>getT")
        editor.press("Tab")
        editor.press("Backspace")
        assert editor.get_text() == "a "
        assert editor.state.selection.anchor_offset == 2

    def test_backspace_inside_entity_removes_whole_run(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("a <>getT")
        editor.press("Tab")
        editor.type_text("!")
        editor.press("ArrowLeft")
        editor.press("ArrowLeft")
        editor.press("ArrowLeft")
        editor.press("Backspace")
        assert editor.get_text() == "a !"
        assert editor.state.document.blocks[0].find_entity_ranges() == []
        assert editor.state.selection.anchor_offset == 2

    def test_backspace_reopens_match(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>getX")
        assert editor.session.suggestions.suggestions == ()
        editor.press("Backspace")
        assert editor.session.suggestions.selected == "getSelection"

    def test_backspace_at_block_start_is_noop(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("ab")
        editor.press("Home")
        editor.press("Backspace")
        assert editor.get_text() == "ab"

    def test_undo_restores_pre_commit_state(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("<>getT")
        editor.press("Tab")
        editor.press("ctrl+z")
        assert editor.get_text() == "<>getT"
        assert editor.session.match is not None
        assert editor.session.suggestions.selected == "getText"

    def test_cursor_moves_do_not_record_undo(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("ab")
        depth = editor.undo_depth
        editor.press("ArrowLeft")
        editor.press("End")
        assert editor.undo_depth == depth

    def test_vertical_movement_clamps_offset(self) -> None:
        editor = HeadlessEditor()
        editor.type_text("a\nlonger")
        editor.press("ArrowUp")
        first = editor.state.document.blocks[0]
        assert editor.state.selection.anchor_key == first.key
        assert editor.state.selection.anchor_offset == 1
