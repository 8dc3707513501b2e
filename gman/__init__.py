"""gman - search a man page and jump to the matching line."""
from __future__ import annotations

__version__ = "0.1.0"
