"""
Hand-off of a worker's records to the XGBoost training engine.

Records are stacked into a CSR matrix holding only their stored entries;
positions that are not stored (implicit or sanitized away) are missing
to the trainer.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import scipy.sparse as sp
import xgboost as xgb

from .records import LabeledPoint

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def records_to_csr(records: Sequence[LabeledPoint], num_features: int | None = None) -> sp.csr_matrix:
    """
    Stack records into a float32 CSR matrix.

    Args:
        records: LabeledPoints, dense or sparse
        num_features: Column count (defaults to the largest record size)
    """
    if num_features is None:
        num_features = max((r.size for r in records), default=0)

    indptr = np.zeros(len(records) + 1, dtype=np.int64)
    index_parts = []
    value_parts = []
    for i, record in enumerate(records):
        if record.size > num_features:
            raise ValueError(
                f"Record {i} has size {record.size} > num_features={num_features}"
            )
        if record.indices is None:
            index_parts.append(np.arange(record.size, dtype=np.int32))
        else:
            index_parts.append(record.indices)
        value_parts.append(record.values)
        indptr[i + 1] = indptr[i] + len(record.values)

    indices = np.concatenate(index_parts) if index_parts else np.zeros(0, dtype=np.int32)
    data = np.concatenate(value_parts) if value_parts else np.zeros(0, dtype=np.float32)
    return sp.csr_matrix((data, indices, indptr), shape=(len(records), num_features))


def group_sizes(records: Sequence[LabeledPoint]) -> list[int] | None:
    """Sizes of consecutive same-group runs, or None if any record lacks a group."""
    if not records or any(r.group is None for r in records):
        return None
    sizes = []
    previous = object()
    for record in records:
        if record.group == previous:
            sizes[-1] += 1
        else:
            sizes.append(1)
            previous = record.group
    return sizes


def build_dmatrix(
    records: Sequence[LabeledPoint],
    missing: float = math.nan,
    num_features: int | None = None,
) -> xgb.DMatrix:
    """
    Build an xgboost.DMatrix from one worker's records.

    Label and weight are always set; base margin when every record has
    one; group sizes when every record has a group id.

    Raises:
        ValueError: If records is empty
    """
    records = list(records)
    if not records:
        raise ValueError("Cannot build a DMatrix from an empty record set")

    dmatrix = xgb.DMatrix(
        records_to_csr(records, num_features),
        label=np.array([r.label for r in records], dtype=np.float32),
        weight=np.array([r.weight for r in records], dtype=np.float32),
        missing=missing,
    )

    if all(r.base_margin is not None for r in records):
        dmatrix.set_base_margin(np.array([r.base_margin for r in records], dtype=np.float32))

    sizes = group_sizes(records)
    if sizes is not None:
        dmatrix.set_group(sizes)

    logger.debug(
        f"Built DMatrix: {dmatrix.num_row()} rows x {dmatrix.num_col()} cols, "
        f"groups={len(sizes) if sizes else 0}"
    )
    return dmatrix
