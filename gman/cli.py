"""Command-line interface for gman."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from . import __version__
from .config import PROGRAM_NAME
from .errors import GmanError
from .manpage import Match, sanitize, search, render_page, open_page, jump_to_line
from .ui import select_match

logger = logging.getLogger(__name__)


def print_results(matches: Sequence[Match]):
    """Print matches to stdout grep-style (non-TUI mode).

    Match lines use ``NUM:``, context lines ``NUM-``; ``--`` separates
    groups that are not adjacent.
    """
    last_printed = 0
    for match in matches:
        first = match.line_number - 1 if match.context_before is not None else match.line_number
        if last_printed and first > last_printed + 1:
            print("--")
        if match.context_before is not None and first > last_printed:
            print(f"{first:5d}- {match.context_before}")
        print(f"{match.line_number:5d}: {match.content}")
        last_printed = match.line_number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Search man pages and jump to specific lines.",
        epilog="Example: gman ls --color",
        add_help=False,
        allow_abbrev=False,
    )
    # No -h: "gman ls -h" searches for "-h"
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--case-sensitive", action="store_true", help="Case sensitive search")
    parser.add_argument("--no-tui", action="store_true", help="Print matches to stdout instead of launching TUI")
    parser.add_argument("--debug", action="store_true", help="Log external commands to stderr")
    parser.add_argument("program", help="Program to search the man page for")
    parser.add_argument("term", nargs='?',
                        help="Search term to find in the man page (if omitted, opens the man page directly)")
    return parser


def _hold_clustered_terms(argv: List[str]):
    """Split off arguments like ``-ctime`` that argparse would read as ``-c time``.

    Returns the remaining arguments and the held-back ones, in order.
    """
    rest, held = [], []
    for i, arg in enumerate(argv):
        if arg == '--':
            rest.extend(argv[i:])
            break
        if arg.startswith('-c') and len(arg) > 2:
            held.append(arg)
        else:
            rest.append(arg)
    return rest, held


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments, taking an unknown option-like argument as the search term."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]

    rest, held = _hold_clustered_terms(argv)
    args, extra = parser.parse_known_args(rest)
    extra = held + extra

    if extra:
        if args.term is None and len(extra) == 1:
            args.term = extra[0]
        else:
            parser.error(f"unrecognized arguments: {' '.join(extra)}")

    return args


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def run(args: argparse.Namespace) -> int:
    """Search the page and hand the chosen line to the pager."""
    # No search term: behave like plain man
    if args.term is None:
        open_page(args.program)
        return 0

    text = sanitize(render_page(args.program))
    matches = search(text, args.term, args.case_sensitive)
    logger.debug("%d matches for %r in %s", len(matches), args.term, args.program)

    if not matches:
        print(f"No matches found for '{args.term}' in man page for '{args.program}'")
        return 0

    if args.no_tui or not _is_interactive():
        print_results(matches)
        return 0

    selected = select_match(matches, args.program, args.term)
    if selected is None:
        logger.debug("Selection cancelled")
        return 0

    jump_to_line(args.program, selected.line_number)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        return run(args)
    except GmanError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
