"""Selection state for the match list, independent of curses."""
from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Sequence

from ..config import ELLIPSIS, MOVE_DOWN, MOVE_UP, CONFIRM, QUIT
from ..manpage.search import Match


class SelectorOutcome(Enum):
    """Where the selection loop stands."""
    BROWSING = "browsing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


def truncate(text: str, max_width: int) -> str:
    """Cut ``text`` to ``max_width`` characters, ending with an ellipsis if cut."""
    if len(text) <= max_width:
        return text
    return text[:max(0, max_width - len(ELLIPSIS))] + ELLIPSIS


def char_width(char: str) -> int:
    """Terminal columns taken by one character."""
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ('W', 'F') else 1


def clip_to_width(text: str, columns: int) -> str:
    """Longest prefix of ``text`` that fits in ``columns`` terminal columns."""
    used = 0
    for i, char in enumerate(text):
        used += char_width(char)
        if used > columns:
            return text[:i]
    return text


def entry_height(match: Match) -> int:
    """Screen rows one match takes: its context line (if any) plus itself."""
    return 2 if match.context_before is not None else 1


class SelectionState:
    """Cursor over a non-empty match list, with the scroll offset that keeps it visible."""

    def __init__(self, matches: Sequence[Match]):
        if not matches:
            raise ValueError("Cannot select from an empty match list")
        self.matches = matches
        self.cursor = 0
        self.top = 0
        self.outcome = SelectorOutcome.BROWSING

    @property
    def selected(self) -> Match:
        return self.matches[self.cursor]

    @property
    def done(self) -> bool:
        return self.outcome is not SelectorOutcome.BROWSING

    def move_down(self):
        self.cursor = (self.cursor + 1) % len(self.matches)

    def move_up(self):
        self.cursor = (self.cursor - 1) % len(self.matches)

    def confirm(self):
        self.outcome = SelectorOutcome.CONFIRMED

    def cancel(self):
        self.outcome = SelectorOutcome.CANCELLED

    def handle_key(self, key: int) -> SelectorOutcome:
        """Apply one key press and return the resulting outcome.

        Unbound keys leave the state untouched. Keys after the loop has
        finished are ignored.
        """
        if self.done:
            return self.outcome

        if key in QUIT:
            self.cancel()
        elif key in CONFIRM:
            self.confirm()
        elif key in MOVE_DOWN:
            self.move_down()
        elif key in MOVE_UP:
            self.move_up()
        return self.outcome

    def scroll_into_view(self, list_height: int) -> int:
        """Adjust ``top`` so the selected entry fits in ``list_height`` rows.

        Walks back from the cursor, so the cost depends on the window size
        and not on the length of the list.

        Returns the new ``top`` index.
        """
        if self.cursor < self.top:
            self.top = self.cursor
            return self.top

        first = self.cursor
        used = entry_height(self.matches[first])
        while first > self.top:
            above = entry_height(self.matches[first - 1])
            if used + above > list_height:
                break
            used += above
            first -= 1
        self.top = first
        return self.top

    def visible(self, list_height: int):
        """Yield ``(index, match)`` for the entries that fit below ``top``."""
        used = 0
        for index in range(self.top, len(self.matches)):
            match = self.matches[index]
            used += entry_height(match)
            if used > list_height and index != self.top:
                break
            yield index, match
