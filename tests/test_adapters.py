"""
Tests for adapters — reflow, dates, timers, database handles, terminals.
"""

import signal
import sqlite3
import threading
import time
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine

from prompter.adapters.database import (
    DbApiHandle,
    SqlAlchemyHandle,
    as_database_handle,
)
from prompter.adapters.dates import DateutilEngine
from prompter.adapters.mock import ScriptedTerminal, StaticDatabase
from prompter.adapters.reflow import TextReflow
from prompter.adapters.terminal import ClickTerminal
from prompter.adapters.timer import AlarmTimer, NullTimer
from prompter.core.errors import ConfigurationError, DateParseError, EndOfInput, TimedOutError

# 2002-03-12 00:00:00 UTC
MAR_12_2002 = 1015891200

requires_alarm = pytest.mark.skipif(not hasattr(signal, "SIGALRM"), reason="needs SIGALRM")


# ── Reflow ───────────────────────────────────────────────────────────


class TestTextReflow:
    def test_prompt_keeps_trailing_space(self):
        assert TextReflow().wrap("> ", 72, 4) == "    > "

    def test_wraps_at_margin(self):
        assert TextReflow().wrap("aaa bbb ccc", 7) == "aaa bbb\nccc"

    def test_indent_every_line(self):
        assert TextReflow().wrap("aaa bbb", 7, 2) == "  aaa\n  bbb"

    def test_collapses_whitespace(self):
        assert TextReflow().wrap("a   b\nc", 72) == "a b c"

    def test_paragraphs(self):
        assert TextReflow().wrap("one\n\ntwo", 72) == "one\n\ntwo"

    def test_long_word_not_lost(self):
        assert "x" * 20 in TextReflow().wrap("x" * 20, 10).replace("\n", "")


# ── Dates ────────────────────────────────────────────────────────────


class TestDateutilEngine:
    def test_parse(self, dates):
        assert dates.parse("2002-03-12", "UTC") == MAR_12_2002

    def test_parse_time(self, dates):
        assert dates.parse("12 March 2002 10:30", "UTC") == MAR_12_2002 + 10 * 3600 + 30 * 60

    def test_explicit_offset_wins(self, dates):
        assert dates.parse("2002-03-12T00:00:00+01:00", "UTC") == MAR_12_2002 - 3600

    def test_zone_applied_to_naive(self, dates):
        assert dates.parse("2002-03-12", "Europe/Paris") == MAR_12_2002 - 3600

    def test_datetime_and_date_objects(self, dates):
        assert dates.parse(datetime(2002, 3, 12), "UTC") == MAR_12_2002
        assert dates.parse(date(2002, 3, 12), "UTC") == MAR_12_2002

    def test_unparseable(self, dates):
        with pytest.raises(DateParseError):
            dates.parse("garbage", "UTC")
        with pytest.raises(DateParseError):
            dates.parse("   ", "UTC")

    def test_format(self, dates):
        assert dates.format(MAR_12_2002, "%Y-%m-%d", "UTC") == "2002-03-12"
        assert dates.format(MAR_12_2002, "%c", "UTC") == "Tue Mar 12 00:00:00 2002"

    def test_format_in_zone(self, dates):
        assert dates.format(MAR_12_2002, "%Y-%m-%d %H:%M", "America/Chicago") == "2002-03-11 18:00"

    def test_epoch_pattern(self, dates):
        assert dates.format(MAR_12_2002, "%s", "UTC") == str(MAR_12_2002)

    def test_zones(self, dates):
        assert dates.knows_zone("UTC")
        assert dates.knows_zone("America/New_York")
        assert not dates.knows_zone("Nowhere/Special")
        with pytest.raises(DateParseError, match="Unknown time zone"):
            dates.parse("2002-03-12", "Nowhere/Special")


# ── Timers ───────────────────────────────────────────────────────────


def _raise_timeout():
    raise TimedOutError(1)


class TestNullTimer:
    def test_never_fires(self):
        fired = []
        timer = NullTimer()
        timer.arm(1, lambda: fired.append(True))
        timer.disarm()
        assert fired == []


@requires_alarm
class TestAlarmTimer:
    def test_available_in_main_thread(self):
        assert AlarmTimer().available

    def test_unavailable_in_worker_thread(self):
        seen = []
        worker = threading.Thread(target=lambda: seen.append(AlarmTimer().available))
        worker.start()
        worker.join()
        assert seen == [False]

    def test_disarm_restores_handler(self):
        previous = signal.getsignal(signal.SIGALRM)
        timer = AlarmTimer()
        timer.arm(60, _raise_timeout)
        assert signal.getsignal(signal.SIGALRM) is not previous
        timer.disarm()
        assert signal.getsignal(signal.SIGALRM) == previous

    def test_zero_seconds_does_nothing(self):
        previous = signal.getsignal(signal.SIGALRM)
        AlarmTimer().arm(0, _raise_timeout)
        assert signal.getsignal(signal.SIGALRM) == previous

    def test_fires(self):
        timer = AlarmTimer()
        with pytest.raises(TimedOutError):
            timer.arm(1, _raise_timeout)
            time.sleep(5)
        assert signal.alarm(0) == 0


# ── Database handles ─────────────────────────────────────────────────


class TestDatabaseHandles:
    def test_static_passthrough(self):
        db = StaticDatabase({})
        assert as_database_handle(db) is db

    def test_dbapi(self, states_db):
        handle = as_database_handle(states_db)
        assert isinstance(handle, DbApiHandle)
        assert handle.query("SELECT code FROM states WHERE region = 'midwest' ORDER BY code") == [
            "MI",
            "OH",
        ]

    def test_dbapi_drops_nulls_and_stringifies(self):
        conn = sqlite3.connect(":memory:")
        conn.execute("CREATE TABLE t (n INTEGER)")
        conn.executemany("INSERT INTO t VALUES (?)", [(1,), (None,), (3,)])
        assert DbApiHandle(conn).query("SELECT n FROM t ORDER BY n") == ["1", "3"]
        conn.close()

    def test_sqlalchemy_engine(self):
        engine = create_engine("sqlite://")
        handle = as_database_handle(engine)
        assert isinstance(handle, SqlAlchemyHandle)
        assert handle.query("SELECT 'x' UNION SELECT 'y' ORDER BY 1") == ["x", "y"]
        engine.dispose()

    def test_not_a_handle(self):
        with pytest.raises(ConfigurationError, match="No database handle was provided"):
            as_database_handle(object())

    def test_static_database_records_queries(self):
        db = StaticDatabase({"q": ["a"]})
        assert db.query("q") == ["a"]
        assert db.query("other") == []
        assert db.queries == ["q", "other"]
        assert db.call_count == 2


# ── Terminals ────────────────────────────────────────────────────────


class TestClickTerminal:
    def test_write(self, capsys):
        terminal = ClickTerminal()
        terminal.write("> ")
        terminal.write_line("done")
        assert capsys.readouterr().out == "> done\n"

    def test_width_from_environment(self, monkeypatch):
        monkeypatch.setenv("COLUMNS", "55")
        assert ClickTerminal().width() == 55


class TestScriptedTerminal:
    def test_replay(self):
        terminal = ScriptedTerminal(["a", "b"])
        assert terminal.read_line() == "a"
        assert terminal.remaining == 1
        terminal.feed("c")
        assert terminal.read_line() == "b"
        assert terminal.read_line() == "c"
        assert terminal.reads == 3

    def test_exhausted(self):
        with pytest.raises(EndOfInput):
            ScriptedTerminal().read_line()

    def test_echo_log(self):
        terminal = ScriptedTerminal(["a", "b"])
        terminal.set_echo(False)
        terminal.read_line()
        terminal.set_echo(True)
        terminal.read_line()
        assert terminal.echo_log == [False, True]

    def test_output(self):
        terminal = ScriptedTerminal(["a"])
        terminal.write("> ")
        terminal.read_line()
        terminal.write_line("ok")
        assert terminal.output == "> \nok\n"
