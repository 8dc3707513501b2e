"""Cleanup of text rendered by man for a terminal."""
from __future__ import annotations

import re
import unicodedata

# Overstrike pair: a character followed by backspace (bold is "x\bx", underline "_\bx")
OVERSTRIKE_RE = re.compile(r'.\x08')

# ANSI escapes some groff builds emit instead of overstrike:
# CSI (ESC [ ... final), OSC (ESC ] ... BEL/ST), charset designation, simple escapes
ANSI_ESCAPE_RE = re.compile(
    r'\x1b'
    r'(?:'
    r'\[[0-9;?]*[ -/]*[@-~]'
    r'|\][^\x07\x1b\n]*(?:\x07|\x1b\\)'
    r'|\([0-9A-Za-z]'
    r'|[A-Za-z=<>]'
    r')'
)

KEEP_CONTROLS = {'\n', '\t'}


def strip_overstrike(text: str) -> str:
    """Remove overstrike pairs so each formatted character appears once.

    Pairs are removed until none are left, which makes the result stable
    under repeated application.
    """
    count = 1
    while count:
        text, count = OVERSTRIKE_RE.subn('', text)
    return text


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences."""
    return ANSI_ESCAPE_RE.sub('', text)


def strip_controls(text: str) -> str:
    """Drop control characters other than newline and tab."""
    return ''.join(
        char for char in text
        if char in KEEP_CONTROLS or unicodedata.category(char) != 'Cc'
    )


def sanitize(raw: str) -> str:
    """Turn raw ``man`` output into plain text.

    Every input line maps to exactly one output line, so line numbers found
    in the result match the ones the pager shows.
    """
    if not raw:
        return ''
    text = strip_overstrike(raw)
    text = strip_ansi(text)
    return strip_controls(text)
