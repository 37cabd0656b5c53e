"""
Database handles for the SQL-backed check.

Two adapters cover the common cases:

    SqlAlchemyHandle   SQLAlchemy Engine or Connection
    DbApiHandle        any DB-API 2.0 connection (sqlite3, psycopg, ...)

``as_database_handle`` picks the right one for whatever the caller put in
the ``sql_check`` declaration.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from prompter.adapters.base import DatabaseHandle
from prompter.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _first_column(rows: Any) -> list[Any]:
    """First column of every row; SQL NULLs are dropped.

    Dates and datetimes are kept as objects so date checks can use them
    directly. Everything else becomes text.
    """
    values = []
    for row in rows:
        value = row[0]
        if value is None:
            continue
        values.append(value if isinstance(value, date) else str(value))
    return values


class SqlAlchemyHandle(DatabaseHandle):
    """Run lookups through a SQLAlchemy Engine or Connection."""

    def __init__(self, bind: Engine | Connection):
        self._bind = bind

    def query(self, sql: str) -> list[Any]:
        logger.debug("SQLAlchemy lookup: %s", sql)
        if isinstance(self._bind, Connection):
            return _first_column(self._bind.execute(text(sql)))
        with self._bind.connect() as conn:
            return _first_column(conn.execute(text(sql)))


class DbApiHandle(DatabaseHandle):
    """Run lookups through a DB-API 2.0 connection."""

    def __init__(self, connection: Any):
        self._connection = connection

    def query(self, sql: str) -> list[Any]:
        logger.debug("DB-API lookup: %s", sql)
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql)
            return _first_column(cursor.fetchall())
        finally:
            cursor.close()


def as_database_handle(obj: Any) -> DatabaseHandle:
    """Adapt a caller-supplied handle.

    Raises:
        ConfigurationError: If ``obj`` is not a usable database handle.
    """
    if isinstance(obj, DatabaseHandle):
        return obj
    if isinstance(obj, (Engine, Connection)):
        return SqlAlchemyHandle(obj)
    if callable(getattr(obj, "cursor", None)):
        return DbApiHandle(obj)
    raise ConfigurationError(f"No database handle was provided (got {type(obj).__name__})")
