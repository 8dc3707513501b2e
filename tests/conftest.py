"""Test configuration and fixtures for gman tests."""

import curses
import os
import stat
import sys
import textwrap
from pathlib import Path

import pytest

from gman.manpage.search import Match

REPO_ROOT = Path(__file__).resolve().parent.parent


class FakeWindow:
    """Stand-in for a curses window that records what gets drawn.

    Keys handed to ``getch`` come from ``keys``; an exception instance in
    the list is raised instead of returned.
    """

    def __init__(self, height=24, width=80, keys=()):
        self.height = height
        self.width = width
        self.keys = list(keys)
        self.refreshes = 0
        self.erase()

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.cells = [[' '] * self.width for _ in range(self.height)]
        self.attrs = [[0] * self.width for _ in range(self.height)]

    def addstr(self, y, x, text, attr=0):
        if y >= self.height or x + len(text) > self.width:
            raise curses.error("addwstr() returned ERR")
        if y == self.height - 1 and x + len(text) == self.width:
            raise curses.error("addwstr() returned ERR")
        for offset, char in enumerate(text):
            self.cells[y][x + offset] = char
            self.attrs[y][x + offset] = attr

    def refresh(self):
        self.refreshes += 1

    def getch(self):
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    def row(self, y):
        return ''.join(self.cells[y]).rstrip()

    def text(self):
        return '\n'.join(self.row(y) for y in range(self.height))

    def find_row(self, needle):
        for y in range(self.height):
            if needle in self.row(y):
                return y
        return None


ATTRS = {
    'title': 1,
    'header': 2,
    'rule': 3,
    'footer': 4,
    'context': 5,
    'marker': 6,
    'text': 7,
    'selected': 8,
}


@pytest.fixture
def attrs():
    return dict(ATTRS)


@pytest.fixture
def sample_matches():
    """Matches for "beta" in "alpha\\nBeta\\ngamma beta\\n"."""
    return [
        Match(2, "Beta", "alpha"),
        Match(3, "gamma beta", "Beta"),
    ]


@pytest.fixture
def many_matches():
    """Thirty matches, each with a context line."""
    return [Match(n * 3, f"option {n} enables color", f"line before {n}") for n in range(1, 31)]


FAKE_MAN = textwrap.dedent("""\
    #!/bin/sh
    # Fake man: "man -P PAGER PROGRAM" or "man PROGRAM"
    if [ "$1" = "-P" ]; then
        pager="$2"
        program="$3"
    else
        pager=""
        program="$1"
    fi

    if [ "$program" != "fake" ]; then
        echo "No manual entry for $program" >&2
        exit 16
    fi

    if [ "$pager" = "cat" ]; then
        printf 'N\\bNA\\bAM\\bME\\bE\\n'
        printf '     fake - a program for tests\\n'
        printf 'O\\bOP\\bPT\\bTI\\bIO\\bON\\bNS\\bS\\n'
        printf '     -\\b--\\b-c\\bco\\bol\\blo\\bor\\br  colorize _\\bo_\\bu_\\bt_\\bp_\\bu_\\bt\\n'
        printf '     --verbose  chatty\\n'
        exit 0
    fi

    echo "PAGER=[$pager] PROGRAM=[$program]"
""")


@pytest.fixture
def fake_man_env(tmp_path):
    """Environment whose PATH starts with a fake ``man`` script."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "man"
    script.write_text(FAKE_MAN)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    env = os.environ.copy()
    env['PATH'] = f"{bin_dir}{os.pathsep}{env.get('PATH', '')}"
    env['PYTHONPATH'] = f"{REPO_ROOT}{os.pathsep}{env.get('PYTHONPATH', '')}"
    env['TERM'] = 'xterm'
    env.pop('MANWIDTH', None)
    return env


@pytest.fixture
def gman_process(fake_man_env):
    """Factory that starts ``python -m gman`` under a pseudo-terminal."""
    pexpect = pytest.importorskip("pexpect")
    procs = []

    def spawn(*args):
        proc = pexpect.spawn(
            sys.executable,
            ['-m', 'gman', *args],
            env=fake_man_env,
            cwd=str(REPO_ROOT),
            timeout=10,
            encoding='utf-8',
        )
        proc.setwinsize(24, 80)
        procs.append(proc)
        return proc

    yield spawn

    for proc in procs:
        if proc.isalive():
            proc.terminate(force=True)
