"""Command-line front door for fuzzypicker.

Reads candidates from arguments or stdin, runs one interactive pick on the
controlling terminal, and prints the selection to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TextIO

from .errors import PickError
from .picker import FuzzyPicker
from .runtime.config import load_picker_options, save_theme_name
from .ui_theme import available_theme_names

LOG_LEVEL_ENV = "FUZZYPICKER_LOG"
EXIT_CANCELLED = 1


def _configure_logging() -> None:
    """Enable stderr logging when ``FUZZYPICKER_LOG`` names a level."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not level_name:
        return
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise SystemExit(f"invalid {LOG_LEVEL_ENV} level: {level_name!r}")
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def read_items(arg_items: list[str], stdin: TextIO) -> list[str]:
    """Return candidates from arguments, or non-empty stdin lines when none were given."""
    if arg_items:
        return list(arg_items)
    if stdin.isatty():
        return []
    return [line.rstrip("\r\n") for line in stdin if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzypicker",
        description="Interactively fuzzy-pick one item and print it.",
    )
    parser.add_argument(
        "items",
        nargs="*",
        help="Candidate items. Read from stdin, one per line, when omitted.",
    )
    parser.add_argument("--prompt", default=None, help="Prompt shown before the query (default: '> ').")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-mouse", action="store_true", help="Do not enable mouse reporting.")
    parser.add_argument(
        "--save-theme",
        action="store_true",
        help="Persist --theme as the default theme and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one pick session.

    Exits with status 1 when the pick is cancelled or there is nothing to pick.
    """
    args = build_parser().parse_args(argv)
    _configure_logging()

    if args.save_theme:
        if args.theme is None:
            raise SystemExit("--save-theme requires --theme")
        save_theme_name(args.theme)
        return

    options = load_picker_options(
        prompt=args.prompt,
        theme=args.theme,
        no_color=args.no_color,
        mouse=False if args.no_mouse else None,
    )
    picker: FuzzyPicker[str] = FuzzyPicker(options=options)
    picker.set_items(read_items(args.items, sys.stdin))
    try:
        selected = picker.pick()
    except PickError as exc:
        raise SystemExit(f"fuzzypicker: {exc}") from exc
    if selected is None:
        raise SystemExit(EXIT_CANCELLED)
    sys.stdout.write(f"{selected}\n")


if __name__ == "__main__":
    main()
