"""Entry point for the pi-complete CLI.

Replays typed text and key presses through a headless editor and prints the
resulting document, the active match and the suggestion dropdown.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pi.complete.config import AutocompleteConfig, load_config
from pi.complete.dropdown import AnsiTheme, PlainTheme, SuggestionDropdown, render_block
from pi.complete.host import HeadlessEditor
from pi.complete.session import AutocompleteSession


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-complete",
        description="pi-complete: trigger-based autocomplete for rich-text editors",
    )
    parser.add_argument("--text", default="", help="Text to type into the editor")
    parser.add_argument(
        "--keys",
        default="",
        help="Comma-separated key ids pressed after typing (e.g. down,down,tab)",
    )
    parser.add_argument("--config", default=None, help="Path to an autocomplete JSON config")
    parser.add_argument("--trigger", default=None, help="Override the trigger token")
    parser.add_argument("--width", type=int, default=40, help="Dropdown width in columns (default: 40)")
    parser.add_argument("--color", action="store_true", help="Style output with ANSI colors")
    parser.add_argument(
        "--list-vocabulary",
        action="store_true",
        help="Print all possible suggestions and exit",
    )
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser


def _load(args: argparse.Namespace) -> AutocompleteConfig:
    config = load_config(args.config) if args.config else AutocompleteConfig()
    if args.trigger is not None:
        config = AutocompleteConfig(
            trigger=args.trigger,
            max_suggestions=config.max_suggestions,
            vocabulary=config.vocabulary,
            keybindings=config.keybindings,
        )
    return config


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = _load(args)
        session = AutocompleteSession(config=config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.list_vocabulary:
        print(f"All possible suggestions: {', '.join(config.vocabulary)}")
        return 0

    editor = HeadlessEditor(session)
    editor.type_text(args.text)
    for key in (k.strip() for k in args.keys.split(",")):
        if key:
            editor.press(key)

    theme = AnsiTheme() if args.color else PlainTheme()
    for block in editor.state.document.blocks:
        print(render_block(block, theme.entity))

    match = session.match
    if match is not None:
        print(f"match: {match.match_string!r} at [{match.trigger_start}, {match.match_end})")
    for line in SuggestionDropdown(session.suggestions, session.caret, theme).render(args.width):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
