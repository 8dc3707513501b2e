"""Configuration and constants for gman."""
from __future__ import annotations

import curses
import os

# Must be set before curses is initialised, otherwise Esc waits a full second
os.environ.setdefault('ESCDELAY', '25')

PROGRAM_NAME = "gman"

# External programs
MAN_COMMAND = "man"
RENDER_PAGER = "cat"               # man -P cat PROGRAM: plain text on stdout
PAGER_TEMPLATE = "less +{line}G"   # man -P "less +NG" PROGRAM: open at line N

# Display
MAX_DISPLAY_WIDTH = 100
ELLIPSIS = "..."
LINE_NUMBER_WIDTH = 4

# Key bindings
KEY_ESC = 27
MOVE_DOWN = {curses.KEY_DOWN, ord('j')}
MOVE_UP = {curses.KEY_UP, ord('k')}
CONFIRM = {ord('\n'), ord('\r'), curses.KEY_ENTER}
QUIT = {ord('q'), KEY_ESC}

FOOTER_TEXT = "↑/↓ j/k: Navigate  │  Enter: Jump to line  │  q/Esc: Quit"
