"""Man page text: rendering, cleanup and search."""
from __future__ import annotations

from .sanitize import sanitize
from .search import Match, search, split_lines
from .bridge import render_page, open_page, jump_to_line

__all__ = [
    'sanitize',
    'Match',
    'search',
    'split_lines',
    'render_page',
    'open_page',
    'jump_to_line',
]
