"""
Row -> LabeledPoint conversion.

Rows arrive in canonical column order (see RowSchema): label, features,
weight, [group], base_margin. Mapping rows keyed by the canonical names
are accepted as well.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Iterator, Sequence, Union

from ..exceptions import SchemaError
from ..records import LabeledPoint, SparseVector, as_vector
from .schema import RowSchema

Row = Union[Sequence[Any], Mapping[str, Any]]


def _as_float(value: Any, column: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise SchemaError(f"Column '{column}' must be numeric, got {type(value).__name__}")
    return float(value)


def _as_optional_float(value: Any, column: str) -> float | None:
    if value is None:
        return None
    return _as_float(value, column)


def _as_int(value: Any, column: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise SchemaError(f"Column '{column}' must be an integer, got {type(value).__name__}")
    return int(value)


def _feature_parts(features: Any) -> tuple[int, Any, Any]:
    vector = as_vector(features)
    if isinstance(vector, SparseVector):
        return vector.size, vector.indices, vector.values
    return vector.size, None, vector.values


def _convert_with_group(row: Sequence[Any]) -> LabeledPoint:
    label, features, weight, group, base_margin = row
    size, indices, values = _feature_parts(features)
    return LabeledPoint(
        _as_float(label, "label"),
        size,
        indices,
        values,
        weight=_as_float(weight, "weight"),
        group=_as_int(group, "group"),
        base_margin=_as_optional_float(base_margin, "base_margin"),
    )


def _convert_without_group(row: Sequence[Any]) -> LabeledPoint:
    label, features, weight, base_margin = row
    size, indices, values = _feature_parts(features)
    return LabeledPoint(
        _as_float(label, "label"),
        size,
        indices,
        values,
        weight=_as_float(weight, "weight"),
        base_margin=_as_optional_float(base_margin, "base_margin"),
    )


_CONVERTERS: dict[RowSchema, Callable[[Sequence[Any]], LabeledPoint]] = {
    RowSchema.WITH_GROUP: _convert_with_group,
    RowSchema.WITHOUT_GROUP: _convert_without_group,
}


class RowConverter:
    """Convert rows of one dataset into LabeledPoints using a fixed schema."""

    def __init__(self, schema: RowSchema) -> None:
        self.schema = schema
        self._convert = _CONVERTERS[schema]

    def normalize(self, row: Row) -> tuple[Any, ...]:
        """
        Put a row into canonical column order.

        Raises:
            SchemaError: If the row's columns do not match the schema
        """
        if isinstance(row, Mapping):
            if set(row) != set(self.schema.columns):
                raise SchemaError(
                    f"Row columns {sorted(row)} do not match schema "
                    f"{self.schema.name} {list(self.schema.columns)}"
                )
            return tuple(row[col] for col in self.schema.columns)

        row = tuple(row)
        if len(row) != self.schema.width:
            raise SchemaError(
                f"Row has {len(row)} columns but schema {self.schema.name} "
                f"expects {self.schema.width}: {list(self.schema.columns)}"
            )
        return row

    def convert(self, row: Row) -> LabeledPoint:
        """Convert one row; dense features keep indices=None."""
        return self._convert(self.normalize(row))

    def __call__(self, row: Row) -> LabeledPoint:
        return self.convert(row)


def convert_rows(rows: Iterable[Row], schema: RowSchema) -> Iterator[LabeledPoint]:
    """Lazily convert a row stream into LabeledPoints."""
    converter = RowConverter(schema)
    for row in rows:
        yield converter.convert(row)
