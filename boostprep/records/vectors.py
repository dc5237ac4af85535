"""
Feature vector types.

Two encodings are supported:
- DenseVector: every position 0..size-1 stored explicitly
- SparseVector: only (index, value) pairs for the stored positions

Values are always float32 and indices int32, which is what the
boosting engine consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import scipy.sparse as sp

from ..exceptions import SchemaError


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def check_sparse_indices(indices: np.ndarray, values: np.ndarray, size: int) -> None:
    """
    Validate sparse index semantics.

    Raises:
        ValueError: If lengths differ, indices are not strictly increasing,
            or an index falls outside [0, size)
    """
    if len(indices) != len(values):
        raise ValueError(
            f"indices and values must have the same length, "
            f"got {len(indices)} and {len(values)}"
        )
    if len(indices) == 0:
        return
    if indices[0] < 0 or indices[-1] >= size:
        raise ValueError(
            f"sparse indices must lie in [0, {size}), got range "
            f"[{indices[0]}, {indices[-1]}]"
        )
    if len(indices) > 1 and not np.all(np.diff(indices) > 0):
        raise ValueError("sparse indices must be strictly increasing")


@dataclass(frozen=True, eq=False)
class DenseVector:
    """Dense float32 feature vector."""

    values: np.ndarray

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float32).ravel()
        object.__setattr__(self, "values", _readonly(values))

    @property
    def size(self) -> int:
        return len(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseVector):
            return NotImplemented
        return np.array_equal(self.values, other.values, equal_nan=True)

    def __repr__(self) -> str:
        return f"DenseVector(size={self.size}, values={self.values.tolist()})"


@dataclass(frozen=True, eq=False)
class SparseVector:
    """Sparse float32 feature vector with strictly increasing int32 indices."""

    size: int
    indices: np.ndarray
    values: np.ndarray

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        indices = np.array(self.indices, dtype=np.int32).ravel()
        values = np.array(self.values, dtype=np.float32).ravel()
        check_sparse_indices(indices, values, self.size)
        object.__setattr__(self, "size", int(self.size))
        object.__setattr__(self, "indices", _readonly(indices))
        object.__setattr__(self, "values", _readonly(values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.indices, other.indices)
            and np.array_equal(self.values, other.values, equal_nan=True)
        )

    def __repr__(self) -> str:
        return (
            f"SparseVector(size={self.size}, indices={self.indices.tolist()}, "
            f"values={self.values.tolist()})"
        )


Vector = Union[DenseVector, SparseVector]


def as_vector(obj: Any) -> Vector:
    """
    Coerce a feature column value into a DenseVector or SparseVector.

    Accepts vector instances, 1-D numpy arrays, lists and tuples (dense),
    and single-row scipy.sparse matrices (sparse).

    Raises:
        SchemaError: If the value cannot be interpreted as a feature vector
    """
    if isinstance(obj, (DenseVector, SparseVector)):
        return obj
    if sp.issparse(obj):
        if obj.shape[0] != 1:
            raise SchemaError(f"Expected a single-row sparse matrix, got shape {obj.shape}")
        row = sp.csr_matrix(obj)
        row.sort_indices()
        return SparseVector(row.shape[1], row.indices, row.data)
    if isinstance(obj, (np.ndarray, list, tuple)):
        arr = np.asarray(obj)
        if arr.ndim != 1:
            raise SchemaError(f"Dense feature vectors must be 1-D, got {arr.ndim} dimensions")
        if not np.issubdtype(arr.dtype, np.number) and arr.size > 0:
            raise SchemaError(f"Dense feature vectors must be numeric, got dtype {arr.dtype}")
        return DenseVector(arr)
    raise SchemaError(f"Unsupported feature vector type: {type(obj).__name__}")
