"""Terminal rendering of the suggestion dropdown and committed entities."""

from __future__ import annotations

from typing import Callable, Protocol

from pi.complete.caret import CaretHint
from pi.complete.document import Block
from pi.complete.selector import SuggestionList
from pi.complete.text_width import truncate_to_width

SELECTED_PREFIX = "→ "
ITEM_PREFIX = "  "


class DropdownTheme(Protocol):
    selected_text: Callable[[str], str]
    item_text: Callable[[str], str]
    entity: Callable[[str], str]


class PlainTheme:
    """Theme that leaves text unstyled."""

    @staticmethod
    def selected_text(text: str) -> str:
        return text

    @staticmethod
    def item_text(text: str) -> str:
        return text

    @staticmethod
    def entity(text: str) -> str:
        return f"[{text}]"


class AnsiTheme:
    """Red highlight for the selected entry, dark red background for entities."""

    @staticmethod
    def selected_text(text: str) -> str:
        return f"\x1b[31m{text}\x1b[39m"

    @staticmethod
    def item_text(text: str) -> str:
        return text

    @staticmethod
    def entity(text: str) -> str:
        return f"\x1b[41m{text}\x1b[49m"


class SuggestionDropdown:
    """Renders a SuggestionList as lines anchored at a caret hint."""

    def __init__(
        self,
        suggestions: SuggestionList,
        caret: CaretHint | None,
        theme: DropdownTheme | None = None,
    ) -> None:
        self._suggestions = suggestions
        self._caret = caret
        self._theme: DropdownTheme = theme if theme is not None else PlainTheme()

    @property
    def anchor(self) -> CaretHint | None:
        return self._caret

    @property
    def visible(self) -> bool:
        return bool(self._suggestions.suggestions) and self._suggestions.is_active and self._caret is not None

    def render(self, width: int) -> list[str]:
        if not self.visible:
            return []

        lines: list[str] = []
        max_w = max(0, width - len(SELECTED_PREFIX))
        for i, suggestion in enumerate(self._suggestions.suggestions):
            label = truncate_to_width(suggestion, max_w)
            if i == self._suggestions.selected_index:
                lines.append(self._theme.selected_text(SELECTED_PREFIX + label))
            else:
                lines.append(self._theme.item_text(ITEM_PREFIX + label))
        return lines


def render_block(block: Block, highlight: Callable[[str], str]) -> str:
    """Render block text with every entity run passed through *highlight*."""
    parts: list[str] = []
    position = 0
    for start, end, _key in block.find_entity_ranges():
        parts.append(block.text[position:start])
        parts.append(highlight(block.text[start:end]))
        position = end
    parts.append(block.text[position:])
    return "".join(parts)
