"""
Shared test fixtures and configuration.
"""

import sqlite3
from pathlib import Path

import pytest

from prompter import Prompter
from prompter.adapters.dates import DateutilEngine
from prompter.adapters.mock import ScriptedTerminal
from prompter.adapters.timer import NullTimer


@pytest.fixture
def terminal() -> ScriptedTerminal:
    """Terminal with no scripted input; tests feed lines as needed."""
    return ScriptedTerminal(columns=80)


@pytest.fixture
def make_prompter(terminal: ScriptedTerminal):
    """Factory for a Prompter wired to the scripted terminal."""

    def _make(*args, **params) -> Prompter:
        return Prompter(*args, terminal=terminal, timer=NullTimer(), **params)

    return _make


@pytest.fixture
def prompter(make_prompter) -> Prompter:
    return make_prompter()


@pytest.fixture
def dates() -> DateutilEngine:
    return DateutilEngine()


@pytest.fixture
def states_db():
    """In-memory sqlite3 connection with a small states table."""
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE states (code TEXT, region TEXT)")
    conn.executemany(
        "INSERT INTO states VALUES (?, ?)",
        [("MI", "midwest"), ("OH", "midwest"), ("CA", "west"), ("NY", "east")],
    )
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Temporary directory for prompter.yml files."""
    path = tmp_path / "project"
    path.mkdir()
    return path
