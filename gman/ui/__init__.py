"""Terminal user interface."""
from __future__ import annotations

from .selector import SelectionState, SelectorOutcome, truncate
from .tui import select_match

__all__ = [
    'SelectionState',
    'SelectorOutcome',
    'truncate',
    'select_match',
]
