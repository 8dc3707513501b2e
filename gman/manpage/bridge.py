"""Running man to fetch page text and to open the pager."""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Dict, List

from ..config import MAN_COMMAND, RENDER_PAGER, PAGER_TEMPLATE
from ..errors import RenderError, LaunchError

logger = logging.getLogger(__name__)


def man_environment() -> Dict[str, str]:
    """Environment shared by the render and jump commands.

    Both must wrap the page at the same width, otherwise the line numbers
    found in the captured text point at different lines in the pager.
    """
    env = os.environ.copy()
    if 'MANWIDTH' not in env:
        env['MANWIDTH'] = str(shutil.get_terminal_size().columns)
    return env


def _run_interactive(command: List[str], env: Dict[str, str] = None) -> int:
    """Run a command attached to our terminal and wait for it."""
    logger.debug("Running %s", command)
    try:
        result = subprocess.run(command, env=env)
    except OSError as e:
        raise LaunchError(command[0], e.strerror or str(e)) from e

    logger.debug("%s exited with status %d", command[0], result.returncode)
    return result.returncode


def render_page(program: str) -> str:
    """Render the man page for ``program`` and return the raw text.

    The text still carries formatting (overstrike, escapes); pass it
    through :func:`gman.manpage.sanitize` before searching.

    Raises:
        RenderError: man exited non-zero (e.g. no such page) or could not start
    """
    command = [MAN_COMMAND, '-P', RENDER_PAGER, program]
    logger.debug("Rendering %s", command)
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=man_environment(),
        )
    except OSError as e:
        raise RenderError(program, stderr=e.strerror or str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.decode('utf-8', errors='replace')
        raise RenderError(program, result.returncode, stderr)

    text = result.stdout.decode('utf-8', errors='replace')
    logger.debug("Rendered %d characters for %s", len(text), program)
    return text


def open_page(program: str) -> None:
    """Show the man page in the user's pager, as plain ``man PROGRAM`` would.

    Raises:
        LaunchError: man could not be started
    """
    _run_interactive([MAN_COMMAND, program])


def jump_to_line(program: str, line_number: int) -> None:
    """Open the man page in the pager positioned at ``line_number`` (1-indexed).

    Raises:
        LaunchError: man could not be started
    """
    if line_number < 1:
        raise ValueError(f"line_number must be positive, got {line_number}")

    pager = PAGER_TEMPLATE.format(line=line_number)
    _run_interactive([MAN_COMMAND, '-P', pager, program], env=man_environment())
