"""Curses screen for picking a match."""
from __future__ import annotations

import curses
from typing import Dict, Optional, Sequence

from ..config import PROGRAM_NAME, MAX_DISPLAY_WIDTH, LINE_NUMBER_WIDTH, ELLIPSIS, FOOTER_TEXT
from ..errors import TerminalError
from ..manpage.search import Match
from .selector import SelectionState, SelectorOutcome, truncate, clip_to_width

SELECT_SYMBOL = ">> "
MATCH_MARKER = "▶ "
LIST_START_Y = 2
LIST_X = 2


def init_colors() -> Dict[str, int]:
    """Set up color pairs and return the attribute for each screen element."""
    if not curses.has_colors():
        return {
            'title': curses.A_BOLD,
            'header': curses.A_NORMAL,
            'rule': curses.A_NORMAL,
            'footer': curses.A_NORMAL,
            'context': curses.A_DIM,
            'marker': curses.A_BOLD,
            'text': curses.A_NORMAL,
            'selected': curses.A_REVERSE | curses.A_BOLD,
        }

    curses.start_color()
    curses.use_default_colors()

    # 256-color gray where available, plain white elsewhere
    gray = 240 if curses.COLORS >= 256 else curses.COLOR_WHITE

    curses.init_pair(1, curses.COLOR_BLUE, -1)     # Title/accents - blue
    curses.init_pair(2, gray, -1)                  # Rules, footer, context - dim gray
    curses.init_pair(3, curses.COLOR_BLUE, -1)     # Selection - blue
    curses.init_pair(4, curses.COLOR_YELLOW, -1)   # Match marker - yellow
    curses.init_pair(5, curses.COLOR_CYAN, -1)     # Header text - cyan

    return {
        'title': curses.color_pair(1) | curses.A_BOLD,
        'header': curses.color_pair(5),
        'rule': curses.color_pair(2),
        'footer': curses.color_pair(2),
        'context': curses.color_pair(2) | curses.A_DIM,
        'marker': curses.color_pair(4) | curses.A_BOLD,
        'text': curses.A_NORMAL,
        'selected': curses.color_pair(3) | curses.A_BOLD,
    }


def header_text(count: int, term: str, program: str) -> str:
    noun = "match" if count == 1 else "matches"
    return f"Found {count} {noun} for '{term}' in '{program}' man page"


def _put(win, y: int, x: int, text: str, attr: int):
    """Write ``text`` at (y, x), clipped to the window by screen columns.

    The bottom-right cell is never written, curses raises on it.
    """
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x >= width:
        return
    room = width - x - (1 if y == height - 1 else 0)
    if room <= 0 or not text:
        return
    clipped = clip_to_width(text, room)
    if clipped:
        win.addstr(y, x, clipped, attr)


def list_height(screen_height: int) -> int:
    """Rows available for matches between the header and the footer."""
    return max(1, screen_height - LIST_START_Y - 2)


def draw_screen(win, state: SelectionState, program: str, term: str, attrs: Dict[str, int]):
    """Redraw the whole screen for the current selection."""
    win.erase()
    height, width = win.getmaxyx()

    # Header
    title = f"◉ {PROGRAM_NAME}"
    _put(win, 0, 2, title, attrs['title'])
    _put(win, 0, 2 + len(title) + 2, header_text(len(state.matches), term, program), attrs['header'])
    _put(win, 1, 0, "-" * width, attrs['rule'])

    # Match list
    rows = list_height(height)
    state.scroll_into_view(rows)

    prefix_width = len(SELECT_SYMBOL) + len(MATCH_MARKER) + LINE_NUMBER_WIDTH + 1
    text_width = max(len(ELLIPSIS) + 1, min(MAX_DISPLAY_WIDTH, width - LIST_X - prefix_width - 1))
    list_end = LIST_START_Y + rows

    y = LIST_START_Y
    for index, match in state.visible(rows):
        is_selected = index == state.cursor
        symbol = SELECT_SYMBOL if is_selected else " " * len(SELECT_SYMBOL)

        # The match line wins over its context when only one row is left
        if match.context_before is not None and y + 1 < list_end:
            number = f"{' ' * len(MATCH_MARKER)}{match.line_number - 1:{LINE_NUMBER_WIDTH}} "
            context_attr = attrs['selected'] if is_selected else attrs['context']
            _put(win, y, LIST_X, " " * len(SELECT_SYMBOL) + number, attrs['context'])
            _put(win, y, LIST_X + prefix_width, truncate(match.context_before, text_width), context_attr)
            y += 1

        if y >= list_end:
            break

        number = f"{MATCH_MARKER}{match.line_number:{LINE_NUMBER_WIDTH}} "
        _put(win, y, LIST_X, symbol, attrs['selected'])
        _put(win, y, LIST_X + len(SELECT_SYMBOL), number, attrs['marker'])
        text_attr = attrs['selected'] if is_selected else attrs['text']
        _put(win, y, LIST_X + prefix_width, truncate(match.content, text_width), text_attr)
        y += 1

    # Footer
    _put(win, height - 2, 0, "-" * width, attrs['rule'])
    _put(win, height - 1, 2, FOOTER_TEXT, attrs['footer'])

    win.refresh()


def _session(stdscr, state: SelectionState, program: str, term: str) -> SelectionState:
    """Key loop; runs inside curses.wrapper, which restores the terminal on exit."""
    attrs = init_colors()
    curses.curs_set(0)

    while not state.done:
        draw_screen(stdscr, state, program, term, attrs)

        try:
            key = stdscr.getch()
        except KeyboardInterrupt:
            state.cancel()
            break

        if key == curses.KEY_RESIZE:
            continue
        state.handle_key(key)

    return state


def select_match(matches: Sequence[Match], program: str, term: str) -> Optional[Match]:
    """Let the user pick one of ``matches``.

    Returns:
        The chosen match, or None if the user quit.

    Raises:
        TerminalError: the screen could not be set up or drawn. The terminal
            has already been restored when this is raised.
    """
    state = SelectionState(matches)
    try:
        curses.wrapper(_session, state, program, term)
    except curses.error as e:
        raise TerminalError(f"Terminal display failed: {e}") from e

    if state.outcome is SelectorOutcome.CONFIRMED:
        return state.selected
    return None
