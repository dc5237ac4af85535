"""
Row schemas accepted by the converter.

A dataset is resolved to exactly one RowSchema before any row is
converted, so rows are never inspected for their shape individually.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..exceptions import SchemaError

LABEL = "label"
FEATURES = "features"
WEIGHT = "weight"
GROUP = "group"
BASE_MARGIN = "base_margin"


class RowSchema(Enum):
    """Accepted column layouts, in canonical column order."""

    WITH_GROUP = (LABEL, FEATURES, WEIGHT, GROUP, BASE_MARGIN)
    WITHOUT_GROUP = (LABEL, FEATURES, WEIGHT, BASE_MARGIN)

    @property
    def columns(self) -> tuple[str, ...]:
        return self.value

    @property
    def width(self) -> int:
        return len(self.value)

    @classmethod
    def resolve(cls, columns: Sequence[str]) -> RowSchema:
        """
        Resolve the schema matching a canonical column sequence.

        Raises:
            SchemaError: If the columns match neither layout
        """
        columns = tuple(columns)
        for schema in cls:
            if columns == schema.value:
                return schema
        raise SchemaError(
            f"Columns {list(columns)} match no accepted layout; expected "
            f"{list(cls.WITH_GROUP.value)} or {list(cls.WITHOUT_GROUP.value)}"
        )


@dataclass(frozen=True)
class ColumnSpec:
    """Names of the source columns feeding each labeled-point field."""

    label_col: str = LABEL
    features_col: str = FEATURES
    weight_col: str | None = None
    base_margin_col: str | None = None
    group_col: str | None = None

    @property
    def schema(self) -> RowSchema:
        return RowSchema.WITH_GROUP if self.group_col is not None else RowSchema.WITHOUT_GROUP

    def selected_columns(self) -> dict[str, str | None]:
        """Canonical field name -> source column name (None when defaulted)."""
        mapping = {
            LABEL: self.label_col,
            FEATURES: self.features_col,
            WEIGHT: self.weight_col,
            GROUP: self.group_col,
            BASE_MARGIN: self.base_margin_col,
        }
        return {field: mapping[field] for field in self.schema.columns}

    def required_columns(self) -> list[str]:
        return [col for col in self.selected_columns().values() if col is not None]
