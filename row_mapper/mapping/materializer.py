"""Row-to-object materializer.

Turns result rows into fully constructed target instances:

1. Take the first constructor exposed by the TypeDescriptor.
2. For each parameter, read the column of the same name and coerce it to
   the parameter's annotation.
3. Call the constructor.
4. For each field with a mutator and a matching column, coerce the column
   to the field's annotation and invoke the mutator.

Steps 2 and 4 are independent, so a field reachable both ways is assigned
twice with the same column value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from row_mapper.core.cursor import ResultRow
from row_mapper.core.exceptions import CoercionError, ConversionError
from row_mapper.mapping.coercion import ValueCoercer
from row_mapper.mapping.descriptor import DescriptorResolver, TypeDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RowMaterializer(Generic[T]):
    """Maps rows onto instances of *target_class*.

    The descriptor is resolved once per mapping operation (``map_one``,
    ``map_many``) and never cached across them.

    Args:
        target_class: The class to construct from row data.
        resolver: Type descriptor resolver; injects parameter-name discovery.
        coercer: Value coercer for column values.
        aliases: Optional column-name to parameter/field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        *,
        resolver: DescriptorResolver | None = None,
        coercer: ValueCoercer | None = None,
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._resolver = resolver or DescriptorResolver()
        self._coercer = coercer or ValueCoercer()
        self._aliases = aliases

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def describe(self) -> TypeDescriptor:
        """Resolve the target's descriptor. Raises DescriptorError if unusable."""
        return self._resolver.resolve(self._target_class)

    def _apply_aliases(self, row: Mapping[str, Any]) -> ResultRow:
        """Apply column aliases to the row."""
        if not self._aliases:
            return ResultRow.from_mapping(row)
        columns = [self._aliases.get(key, key) for key in row]
        return ResultRow(columns, list(row.values()))

    def _coerce(self, value: Any, annotation: Any, name: str) -> Any:
        try:
            return self._coercer.coerce(value, annotation)
        except CoercionError as e:
            raise ConversionError(
                self._target_class.__qualname__, f"column '{name}': {e}"
            ) from e

    def convert(self, descriptor: TypeDescriptor, row: Mapping[str, Any]) -> T:
        """Materialize one row against an already resolved descriptor."""
        row = self._apply_aliases(row)
        class_name = self._target_class.__qualname__
        constructor = descriptor.constructor

        arguments: dict[str, Any] = {}
        for param in constructor.parameters:
            if param.name not in row:
                if param.has_default:
                    continue
                raise ConversionError(
                    class_name,
                    f"no column for constructor parameter '{param.name}' "
                    f"(available: {list(row.columns)})",
                )
            arguments[param.name] = self._coerce(row[param.name], param.annotation, param.name)

        try:
            instance = constructor.invoke(arguments)
        except Exception as e:
            raise ConversionError(
                class_name, f"constructor '{constructor.name}' failed: {e}"
            ) from e

        for field in descriptor.mutable_fields:
            if field.name not in row:
                continue
            value = self._coerce(row[field.name], field.annotation, field.name)
            try:
                field.setter(instance, value)  # type: ignore[misc]
            except Exception as e:
                raise ConversionError(class_name, f"setter for '{field.name}' failed: {e}") from e

        return instance  # type: ignore[no-any-return]

    def map_one(self, row: Mapping[str, Any]) -> T:
        """Map a single row to a target_class instance."""
        return self.convert(self.describe(), row)

    def map_many(
        self,
        rows: Iterable[Mapping[str, Any]],
        descriptor: TypeDescriptor | None = None,
    ) -> list[T]:
        """Map all rows in order, reusing *descriptor* when given.

        Any failure aborts the whole batch; no partial list is returned.
        """
        descriptor = descriptor or self.describe()
        results = [self.convert(descriptor, row) for row in rows]
        logger.debug("Materialized %d %s row(s)", len(results), self._target_class.__qualname__)
        return results
