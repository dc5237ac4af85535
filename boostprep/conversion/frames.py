"""
DataFrame column selection.

Selects and casts the columns named by a ColumnSpec into canonical row
order, filling defaults for the optional columns the frame does not carry:
- weight defaults to 1.0
- base_margin defaults to None
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

import numpy as np
import pandas as pd

from ..exceptions import SchemaError
from .schema import BASE_MARGIN, FEATURES, GROUP, LABEL, WEIGHT, ColumnSpec

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _cast_numeric(series: pd.Series, dtype: type, column: str) -> np.ndarray:
    try:
        return series.to_numpy(dtype=dtype)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"Column '{column}' cannot be cast to {np.dtype(dtype).name}: {e}") from e


def select_columns(frame: pd.DataFrame, spec: ColumnSpec) -> dict[str, Any]:
    """
    Select and cast the spec's columns from a DataFrame.

    Returns:
        Mapping of canonical field name -> column values (array or scalar default)

    Raises:
        SchemaError: If a named column is missing or cannot be cast
    """
    missing_cols = [col for col in spec.required_columns() if col not in frame.columns]
    if missing_cols:
        raise SchemaError(
            f"DataFrame is missing columns {missing_cols}; available: {list(frame.columns)}"
        )

    selected: dict[str, Any] = {}
    for field, source in spec.selected_columns().items():
        if field == FEATURES:
            selected[field] = frame[source].to_numpy(dtype=object)
        elif source is None:
            selected[field] = 1.0 if field == WEIGHT else None
        elif field == GROUP:
            selected[field] = _cast_numeric(frame[source], np.int32, source)
        else:
            selected[field] = _cast_numeric(frame[source], np.float32, source)
    return selected


def select_rows(frame: pd.DataFrame, spec: ColumnSpec) -> Iterator[tuple[Any, ...]]:
    """Yield the frame's rows as tuples in canonical column order."""
    selected = select_columns(frame, spec)
    columns = spec.schema.columns
    n_rows = len(frame)
    logger.debug(f"Selecting {n_rows:,} rows with schema {spec.schema.name}")

    for i in range(n_rows):
        row = []
        for field in columns:
            values = selected[field]
            row.append(values[i] if isinstance(values, np.ndarray) else values)
        yield tuple(row)


def feature_matrix_to_frame(
    X: np.ndarray,
    y: np.ndarray,
    weight: np.ndarray | None = None,
    group: np.ndarray | None = None,
    base_margin: np.ndarray | None = None,
) -> pd.DataFrame:
    """
    Build a frame with one dense feature vector per row from a 2-D matrix.

    Column names follow the canonical field names, so the default
    ColumnSpec (plus weight/group/base_margin columns when given) applies.
    """
    X = np.asarray(X, dtype=np.float32)
    if X.ndim != 2:
        raise SchemaError(f"Feature matrix must be 2-D, got {X.ndim} dimensions")
    if len(y) != len(X):
        raise SchemaError(f"Label length {len(y)} does not match {len(X)} feature rows")

    data: dict[str, Any] = {LABEL: np.asarray(y, dtype=np.float32), FEATURES: list(X)}
    if weight is not None:
        data[WEIGHT] = np.asarray(weight, dtype=np.float32)
    if group is not None:
        data[GROUP] = np.asarray(group, dtype=np.int32)
    if base_margin is not None:
        data[BASE_MARGIN] = np.asarray(base_margin, dtype=np.float32)
    return pd.DataFrame(data)


def column_spec_for(frame: pd.DataFrame) -> ColumnSpec:
    """ColumnSpec using the canonical names present in the frame."""
    return ColumnSpec(
        label_col=LABEL,
        features_col=FEATURES,
        weight_col=WEIGHT if WEIGHT in frame.columns else None,
        base_margin_col=BASE_MARGIN if BASE_MARGIN in frame.columns else None,
        group_col=GROUP if GROUP in frame.columns else None,
    )
