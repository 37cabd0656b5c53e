"""
sql_check — list_check against values looked up in a database.

Declaration: a list whose first item is a database handle and whose
remaining items are queries, bare or paired with a message:

    [engine, "SELECT code FROM states"]
    [conn, ("SELECT code FROM states", "%s is not a state. Valid: %s")]

Each query's first column becomes one candidate list; a value must appear
in all of them. Lookups happen on first use. With caching requested, the
rows are kept in the engine's ``SqlResultCache`` and later calls on the
same engine that also request caching reuse them instead of querying
again. A call with caching off always queries.
"""

from __future__ import annotations

import logging
from typing import Any

from prompter.adapters.database import as_database_handle
from prompter.core.checks.listing import ListCheck
from prompter.core.errors import ConfigurationError, NoRowsError
from prompter.core.models.checks import ListRule, SqlDeclaration, SqlQuery
from prompter.core.models.config import RequestConfig, ValueType

logger = logging.getLogger(__name__)


class SqlResultCache:
    """Rows already fetched, keyed by (handle, query, value type).

    Entries are written once and never invalidated; build a new engine to
    see fresh data.
    """

    def __init__(self) -> None:
        self._rows: dict[tuple[int, str, ValueType], tuple[Any, ...]] = {}
        self._sources: dict[int, Any] = {}

    def __len__(self) -> int:
        return len(self._rows)

    @staticmethod
    def _key(source: Any, sql: str, value_type: ValueType) -> tuple[int, str, ValueType]:
        return (id(source), sql, value_type)

    def get(self, source: Any, sql: str, value_type: ValueType) -> tuple[Any, ...] | None:
        return self._rows.get(self._key(source, sql, value_type))

    def store(self, source: Any, sql: str, value_type: ValueType, rows: tuple[Any, ...]) -> None:
        key = self._key(source, sql, value_type)
        if key in self._rows:
            return
        self._rows[key] = rows
        # keep the handle alive so its id cannot be reused by another object
        self._sources[id(source)] = source


class SqlCheck(ListCheck):
    """Match input against the results of SQL queries."""

    name = "sql_check"

    def normalize(self, declaration: Any, config: RequestConfig) -> SqlDeclaration:
        if not isinstance(declaration, (list, tuple)):
            raise ConfigurationError("value for sql_check must be a list!")
        if len(declaration) < 2:
            raise ConfigurationError("sql_check needs a database handle and at least one query")

        source, *items = declaration
        handle = as_database_handle(source)
        queries = []
        for item in items:
            if isinstance(item, str):
                queries.append(SqlQuery(item))
            elif isinstance(item, (list, tuple)) and len(item) == 2 and isinstance(item[0], str):
                if item[1] is not None and not isinstance(item[1], str):
                    raise ConfigurationError(f"Invalid sql_check error message: {item[1]!r}")
                queries.append(SqlQuery(item[0], item[1]))
            else:
                raise ConfigurationError(f"Invalid sql_check element: {item!r}")
        return SqlDeclaration(source=source, handle=handle, queries=tuple(queries))

    def evaluate(
        self,
        values: list[Any],
        rules: SqlDeclaration,
        config: RequestConfig,
    ) -> bool:
        return super().evaluate(values, self.resolve(rules, config), config)

    def resolve(self, declaration: SqlDeclaration, config: RequestConfig) -> list[ListRule]:
        """Candidate lists for every query, from the cache or the database.

        Raises:
            NoRowsError: If a query returns no rows.
            ConfigurationError: If ``type=date`` and a row is not a date.
        """
        cache: SqlResultCache | None = self.context.sql_cache
        rules = []
        for query in declaration.queries:
            use_cache = cache is not None and config.cache_sql_results
            rows = cache.get(declaration.source, query.sql, config.value_type) if use_cache else None
            if rows is None:
                rows = self._lookup(declaration, query, config)
                if use_cache:
                    cache.store(declaration.source, query.sql, config.value_type, rows)
            else:
                logger.debug("sql_check: cache hit for %s", query.sql)
            rules.append(ListRule(rows, query.template))
        return rules

    def _lookup(self, declaration: SqlDeclaration, query: SqlQuery, config: RequestConfig) -> tuple[Any, ...]:
        rows = declaration.handle.query(query.sql)
        if not rows:
            raise NoRowsError(query.sql)
        logger.info("sql_check: %d rows from %s", len(rows), query.sql)
        if config.is_date:
            coercer = self.context.coercer
            return tuple(
                coercer.require_epoch(row, config, "query result", literal_epochs=False)
                for row in rows
            )
        return tuple(str(row) for row in rows)
