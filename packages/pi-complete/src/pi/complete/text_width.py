"""Terminal display width helpers for rendering suggestions and caret anchors."""

from __future__ import annotations

import re

import grapheme
import wcwidth as _wcwidth

# SGR / cursor CSI sequences emitted by themes
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJ]")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Display width of one grapheme cluster.

    Multi-codepoint clusters containing VS16 or ZWJ render as emoji (2 cols);
    everything else uses wcwidth on the base codepoint.
    """
    if not g:
        return 0
    if len(g) > 1 and ("\ufe0f" in g or "\u200d" in g):
        return 2
    w = _wcwidth.wcwidth(g[0])
    return max(w, 0)


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies, ignoring ANSI codes.

    Tabs count as 3 columns.
    """
    stripped = strip_ansi(text).replace("\t", "   ")
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Cut *text* at a grapheme boundary so it fits in *max_width* columns.

    The ellipsis is appended when truncation happens and counts towards the
    width. Input is expected to be plain text, style it afterwards.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return ellipsis[:max_width]

    taken: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > target:
            break
        taken.append(g)
        cols += w
    return "".join(taken) + ellipsis
