"""
Adapters — concrete collaborators for terminal, text, dates, SQL and timing.
"""

from prompter.adapters.base import DatabaseHandle, DateEngine, Reflow, Terminal, Timer
from prompter.adapters.database import DbApiHandle, SqlAlchemyHandle, as_database_handle
from prompter.adapters.dates import DateutilEngine
from prompter.adapters.reflow import TextReflow
from prompter.adapters.terminal import ClickTerminal
from prompter.adapters.timer import AlarmTimer, NullTimer

__all__ = [
    "AlarmTimer",
    "ClickTerminal",
    "DatabaseHandle",
    "DateEngine",
    "DateutilEngine",
    "DbApiHandle",
    "NullTimer",
    "Reflow",
    "SqlAlchemyHandle",
    "Terminal",
    "TextReflow",
    "Timer",
    "as_database_handle",
]
