"""RowMapper exception hierarchy.

All exceptions are RowMapper-specific. Raw driver exceptions are never
exposed to callers; they are chained as ``__cause__`` instead.
"""

from __future__ import annotations

from typing import Any


class RowMapperError(Exception):
    """Base exception for all RowMapper errors."""


# --- Statement ---


class StatementError(RowMapperError):
    """Base for errors raised at the driver boundary."""


class BindError(StatementError):
    """Raised when statement preparation or parameter binding fails."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Fail to connect to db server : {detail}")


class ExecutionError(StatementError):
    """Raised when a non-query statement fails to execute."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Fail to execute query : {detail}")


class QueryExecutionError(StatementError):
    """Raised when a query fails to execute or its cursor cannot be read."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Fail to execute select query : {detail}")


class NotUniqueError(RowMapperError, ValueError):
    """Raised when find_one matches more than one row."""

    def __init__(self, row_count: int) -> None:
        self.row_count = row_count
        super().__init__(f"Query result not unique: {row_count} rows (expected 0 or 1)")


# --- Mapping ---


class MappingError(RowMapperError):
    """Base for mapping errors."""


class DescriptorError(MappingError):
    """Raised when a target type exposes no usable constructor."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"[{target_class}] {detail}")


class ConversionError(MappingError):
    """Raised when a row cannot be converted into the target type."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        self.detail = detail
        super().__init__(f"Fail to convert result set to target {target_class}: {detail}")


class CoercionError(MappingError):
    """Raised when a value cannot be coerced into a destination type."""

    def __init__(self, value: Any, target_type: Any, detail: str | None = None) -> None:
        self.value = value
        self.source_type = type(value)
        self.target_type = target_type
        message = f"Cannot coerce {_type_name(self.source_type)} to {_type_name(target_type)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


# --- Adapter ---


class AdapterError(RowMapperError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""
