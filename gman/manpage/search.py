"""Line-oriented search over plain man page text."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Match:
    """A line that contains the search term.

    Attributes:
        line_number: 1-indexed position of the line in the page text
        content: Full text of the matching line
        context_before: Text of the preceding line, None for the first line
    """
    line_number: int
    content: str
    context_before: Optional[str] = None


def split_lines(text: str) -> List[str]:
    """Split text on newlines without a phantom empty line at the end."""
    if not text:
        return []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def search(text: str, term: str, case_sensitive: bool = False) -> List[Match]:
    """Find every line of ``text`` containing ``term``.

    Args:
        text: Sanitized man page text
        term: Literal substring to look for. An empty term matches every line.
        case_sensitive: When False, both sides are lowercased before comparing

    Returns:
        Matches in ascending line order.
    """
    lines = split_lines(text)
    needle = term if case_sensitive else term.lower()

    matches = []
    for i, line in enumerate(lines):
        haystack = line if case_sensitive else line.lower()
        if needle not in haystack:
            continue

        matches.append(Match(
            line_number=i + 1,
            content=line,
            context_before=lines[i - 1] if i > 0 else None,
        ))

    return matches
