"""Result rows and forward-only result cursors."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from row_mapper.core.exceptions import QueryExecutionError


class ResultRow(Mapping[str, Any]):
    """One row of a result set with column access by name.

    Lookup is exact first, then case-insensitive. When a label occurs more
    than once (e.g. joins), the first column wins.
    """

    __slots__ = ("_columns", "_values", "_index", "_folded")

    def __init__(self, columns: Sequence[str], values: Sequence[Any]) -> None:
        if len(columns) != len(values):
            raise ValueError(f"Row has {len(values)} values for {len(columns)} columns")
        self._columns = tuple(columns)
        self._values = tuple(values)
        self._index: dict[str, int] = {}
        self._folded: dict[str, int] = {}
        for position, name in enumerate(self._columns):
            self._index.setdefault(name, position)
            self._folded.setdefault(name.casefold(), position)

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> ResultRow:
        """Build a row from a column-name to value mapping."""
        if isinstance(row, ResultRow):
            return row
        return cls(list(row.keys()), list(row.values()))

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    def _position(self, name: str) -> int:
        position = self._index.get(name)
        if position is None:
            position = self._folded.get(name.casefold())
        if position is None:
            raise KeyError(name)
        return position

    def __getitem__(self, name: str) -> Any:
        return self._values[self._position(name)]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name in self._index or name.casefold() in self._folded

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self._columns, self._values, strict=True))
        return f"ResultRow({pairs})"


class ResultCursor:
    """Forward-only cursor over a DB-API cursor, yielding ResultRow objects.

    Driver errors raised while reading are wrapped in QueryExecutionError.
    """

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        description = cursor.description
        self.columns: list[str] = [desc[0] for desc in description] if description else []

    def fetch(self) -> ResultRow | None:
        """Advance to the next row, or return None when exhausted."""
        if not self.columns:
            return None
        try:
            raw = self._cursor.fetchone()
        except Exception as e:
            raise QueryExecutionError(str(e)) from e
        if raw is None:
            return None
        if isinstance(raw, Mapping):
            return ResultRow(list(raw.keys()), list(raw.values()))
        return ResultRow(self.columns, raw)

    def __iter__(self) -> Iterator[ResultRow]:
        while True:
            row = self.fetch()
            if row is None:
                return
            yield row
