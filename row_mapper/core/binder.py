"""Statement preparation and positional parameter binding."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from row_mapper.core.cursor import ResultCursor
from row_mapper.core.exceptions import BindError
from row_mapper.core.params import count_placeholders, normalize_params

logger = logging.getLogger(__name__)


class Statement:
    """A SQL template with positional parameters bound to a DB-API cursor.

    Values are handed to the driver untouched; any type translation is the
    driver's business.
    """

    def __init__(self, cursor: Any, sql: str, placeholder_count: int) -> None:
        self._cursor = cursor
        self.sql = sql
        self.placeholder_count = placeholder_count
        self._values: list[Any] = [None] * placeholder_count
        self._bound: set[int] = set()

    @property
    def parameters(self) -> tuple[Any, ...]:
        return tuple(self._values)

    def bind(self, index: int, value: Any) -> None:
        """Bind *value* to the placeholder at 0-based *index*."""
        if not 0 <= index < self.placeholder_count:
            raise BindError(
                f"parameter index {index} out of range for {self.placeholder_count} placeholder(s)"
            )
        self._values[index] = value
        self._bound.add(index)

    def _check_bound(self) -> None:
        missing = [i for i in range(self.placeholder_count) if i not in self._bound]
        if missing:
            raise BindError(f"no value bound for parameter index(es) {missing}")

    def execute_update(self) -> int:
        """Execute a statement that returns no rows. Returns the affected row count."""
        self._check_bound()
        logger.debug("Executing update: %s", self.sql)
        self._cursor.execute(self.sql, self.parameters)
        return int(self._cursor.rowcount)

    def execute_query(self) -> ResultCursor:
        """Execute a query and return a forward-only cursor over its rows."""
        self._check_bound()
        logger.debug("Executing query: %s", self.sql)
        self._cursor.execute(self.sql, self.parameters)
        return ResultCursor(self._cursor)

    def close(self) -> None:
        self._cursor.close()


def prepare(connection: Any, sql: str, paramstyle: str) -> Statement:
    """Prepare *sql* on *connection*, rewriting ``?`` placeholders for the driver.

    Raises:
        BindError: If the placeholders cannot be rewritten or no cursor can be opened.
    """
    try:
        driver_sql = normalize_params(sql, paramstyle)
        cursor = connection.cursor()
    except Exception as e:
        raise BindError(str(e)) from e
    return Statement(cursor, driver_sql, count_placeholders(sql))


def bind_arguments(statement: Statement, args: Sequence[Any]) -> Statement:
    """Bind *args* to *statement* in positional order."""
    if len(args) != statement.placeholder_count:
        raise BindError(
            f"statement expects {statement.placeholder_count} parameter(s), got {len(args)}"
        )
    for index, value in enumerate(args):
        statement.bind(index, value)
    return statement
