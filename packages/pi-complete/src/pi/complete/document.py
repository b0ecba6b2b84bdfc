"""Immutable rich-text document model with entity annotations.

A ``Document`` is an ordered tuple of ``Block`` values. Each block carries its
plain text plus a parallel tuple of per-character entity keys. Entities live
in a document-level map from key to ``Entity``; attaching an entity to a range
only tags characters, it never removes content.

Every operation returns a new value. Previous documents stay valid, which is
what lets a host keep them on an undo stack.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Literal

EntityMutability = Literal["MUTABLE", "IMMUTABLE", "SEGMENTED"]

TOKEN = "TOKEN"
IMMUTABLE: EntityMutability = "IMMUTABLE"


def gen_block_key() -> str:
    """Generate a short random block key."""
    return uuid.uuid4().hex[:5]


@dataclass(frozen=True)
class Entity:
    """Metadata attached to a range of characters."""

    kind: str
    mutability: EntityMutability
    data: Any = None


@dataclass(frozen=True)
class Block:
    """A single block of text with per-character entity keys."""

    key: str
    text: str = ""
    entities: tuple[str | None, ...] = ()

    def __post_init__(self) -> None:
        if not self.entities and self.text:
            object.__setattr__(self, "entities", (None,) * len(self.text))
        if len(self.entities) != len(self.text):
            raise ValueError(
                f"Block {self.key!r}: {len(self.entities)} entity slots for "
                f"{len(self.text)} characters"
            )

    def get_entity_at(self, offset: int) -> str | None:
        """Return the entity key at *offset*, or None if untagged or out of range."""
        if 0 <= offset < len(self.entities):
            return self.entities[offset]
        return None

    def find_entity_ranges(self) -> list[tuple[int, int, str]]:
        """Return ``(start, end, key)`` for each contiguous run of one entity."""
        ranges: list[tuple[int, int, str]] = []
        start = 0
        current: str | None = None
        for i, key in enumerate(self.entities):
            if key == current:
                continue
            if current is not None:
                ranges.append((start, i, current))
            start = i
            current = key
        if current is not None:
            ranges.append((start, len(self.entities), current))
        return ranges


@dataclass(frozen=True)
class Document:
    """Ordered blocks plus the entity map shared by all of them."""

    blocks: tuple[Block, ...] = ()
    entity_map: dict[str, Entity] = field(default_factory=dict)
    last_entity_key: int = 0

    @classmethod
    def from_text(cls, text: str = "") -> Document:
        """Build a document with one block per line of *text*."""
        return cls(
            blocks=tuple(
                Block(key=gen_block_key(), text=line) for line in text.split("\n")
            )
        )

    def find_block(self, block_key: str) -> Block | None:
        for block in self.blocks:
            if block.key == block_key:
                return block
        return None

    def get_block(self, block_key: str) -> Block:
        block = self.find_block(block_key)
        if block is None:
            raise KeyError(f"Unknown block key: {block_key}")
        return block

    def block_index(self, block_key: str) -> int:
        for i, block in enumerate(self.blocks):
            if block.key == block_key:
                return i
        raise KeyError(f"Unknown block key: {block_key}")

    def get_plain_text(self) -> str:
        return "\n".join(block.text for block in self.blocks)

    def get_entity(self, entity_key: str) -> Entity:
        try:
            return self.entity_map[entity_key]
        except KeyError:
            raise KeyError(f"Unknown entity key: {entity_key}") from None

    def create_entity(
        self,
        kind: str,
        mutability: EntityMutability,
        data: Any = None,
    ) -> tuple[Document, str]:
        """Register a new entity and return ``(document, key)``.

        The entity is not attached to any characters yet.
        """
        key_number = self.last_entity_key + 1
        key = str(key_number)
        entity_map = dict(self.entity_map)
        entity_map[key] = Entity(kind=kind, mutability=mutability, data=data)
        return (
            replace(self, entity_map=entity_map, last_entity_key=key_number),
            key,
        )

    def replace_text(
        self,
        block_key: str,
        start: int,
        end: int,
        text: str,
        entity_key: str | None = None,
    ) -> Document:
        """Replace ``[start, end)`` of a block with *text*.

        Every inserted character is tagged with *entity_key* (or left
        untagged when it is None).
        """
        block = self.get_block(block_key)
        if not 0 <= start <= end <= len(block.text):
            raise ValueError(
                f"Range [{start}, {end}) out of bounds for block of length {len(block.text)}"
            )
        if entity_key is not None and entity_key not in self.entity_map:
            raise KeyError(f"Unknown entity key: {entity_key}")

        new_block = Block(
            key=block.key,
            text=block.text[:start] + text + block.text[end:],
            entities=block.entities[:start]
            + (entity_key,) * len(text)
            + block.entities[end:],
        )
        return self._with_block(new_block)

    def split_block(self, block_key: str, offset: int) -> tuple[Document, str]:
        """Split a block at *offset*; return the document and the new block's key."""
        block = self.get_block(block_key)
        if not 0 <= offset <= len(block.text):
            raise ValueError(f"Offset {offset} out of bounds for block {block_key!r}")

        head = Block(key=block.key, text=block.text[:offset], entities=block.entities[:offset])
        tail = Block(key=gen_block_key(), text=block.text[offset:], entities=block.entities[offset:])
        index = self.block_index(block_key)
        blocks = self.blocks[:index] + (head, tail) + self.blocks[index + 1 :]
        return replace(self, blocks=blocks), tail.key

    def _with_block(self, new_block: Block) -> Document:
        index = self.block_index(new_block.key)
        blocks = self.blocks[:index] + (new_block,) + self.blocks[index + 1 :]
        return replace(self, blocks=blocks)


@dataclass(frozen=True)
class Selection:
    """Anchor/focus pair addressing positions inside blocks."""

    anchor_key: str
    anchor_offset: int
    focus_key: str
    focus_offset: int

    @classmethod
    def collapsed(cls, block_key: str, offset: int) -> Selection:
        return cls(
            anchor_key=block_key,
            anchor_offset=offset,
            focus_key=block_key,
            focus_offset=offset,
        )

    @property
    def is_collapsed(self) -> bool:
        return self.anchor_key == self.focus_key and self.anchor_offset == self.focus_offset


@dataclass(frozen=True)
class EditorState:
    """A document together with the current selection."""

    document: Document
    selection: Selection

    @classmethod
    def create(cls, text: str = "") -> EditorState:
        """Create a state for *text* with the cursor at the end of the last block."""
        document = Document.from_text(text)
        last = document.blocks[-1]
        return cls(document=document, selection=Selection.collapsed(last.key, len(last.text)))

    @property
    def anchor_block(self) -> Block | None:
        return self.document.find_block(self.selection.anchor_key)

    def push(self, document: Document, selection: Selection | None = None) -> EditorState:
        """Return a new state with *document* and optionally a new selection."""
        return EditorState(
            document=document,
            selection=selection if selection is not None else self.selection,
        )

    def with_cursor(self, block_key: str, offset: int) -> EditorState:
        return replace(self, selection=Selection.collapsed(block_key, offset))
