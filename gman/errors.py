"""Exceptions raised by gman."""
from __future__ import annotations

from typing import Optional


class GmanError(Exception):
    """Base class for every error gman reports to the user."""


class RenderError(GmanError):
    """The man page renderer failed or could not be launched."""

    def __init__(self, program: str, returncode: Optional[int] = None, stderr: str = ""):
        self.program = program
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Failed to get man page for '{program}'"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class LaunchError(GmanError):
    """An external program (renderer or pager) could not be spawned."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not launch '{command}': {reason}")


class TerminalError(GmanError):
    """Entering, drawing or leaving the interactive screen failed."""
