"""
LabeledPoint - the unit record consumed by the boosting engine.

A LabeledPoint pairs a feature vector with a label and the optional
weight, ranking group and base margin columns. Records are immutable;
sanitization produces new records through ``replace``.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from .vectors import DenseVector, SparseVector, Vector, _readonly, check_sparse_indices


@dataclass(frozen=True, eq=False)
class LabeledPoint:
    """Labeled feature vector in dense (indices=None) or sparse encoding."""

    label: float
    size: int
    indices: np.ndarray | None
    values: np.ndarray
    weight: float = 1.0
    group: int | None = None
    base_margin: float | None = None

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")

        values = _readonly(np.array(self.values, dtype=np.float32).ravel())
        if self.indices is None:
            if len(values) != self.size:
                raise ValueError(
                    f"dense values must have length size={self.size}, got {len(values)}"
                )
            indices = None
        else:
            indices = _readonly(np.array(self.indices, dtype=np.int32).ravel())
            check_sparse_indices(indices, values, self.size)

        object.__setattr__(self, "label", np.float32(self.label))
        object.__setattr__(self, "size", int(self.size))
        object.__setattr__(self, "indices", indices)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "weight", np.float32(self.weight))
        if self.group is not None:
            object.__setattr__(self, "group", int(self.group))
        if self.base_margin is not None:
            object.__setattr__(self, "base_margin", np.float32(self.base_margin))

    @property
    def is_sparse(self) -> bool:
        return self.indices is not None

    @property
    def nnz(self) -> int:
        """Number of explicitly stored entries."""
        return len(self.values)

    @property
    def features(self) -> Vector:
        """Feature vector of the point as a DenseVector or SparseVector."""
        if self.indices is None:
            return DenseVector(self.values)
        return SparseVector(self.size, self.indices, self.values)

    @classmethod
    def from_vector(cls, vector: Vector, label: float = 0.0) -> LabeledPoint:
        """
        Build a point from a feature vector.

        The default dummy label is used when constructing prediction inputs,
        where no target is available.
        """
        if isinstance(vector, SparseVector):
            return cls(label, vector.size, vector.indices, vector.values)
        return cls(label, vector.size, None, vector.values)

    def replace(self, **changes: Any) -> LabeledPoint:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dense(self) -> np.ndarray:
        """Feature values as a dense float32 array; unstored positions are 0.0."""
        if self.indices is None:
            return self.values.copy()
        dense = np.zeros(self.size, dtype=np.float32)
        dense[self.indices] = self.values
        return dense

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabeledPoint):
            return NotImplemented
        if (self.indices is None) != (other.indices is None):
            return False
        if self.indices is not None and not np.array_equal(self.indices, other.indices):
            return False
        return (
            _same_float(self.label, other.label)
            and self.size == other.size
            and np.array_equal(self.values, other.values, equal_nan=True)
            and _same_float(self.weight, other.weight)
            and self.group == other.group
            and _same_optional_float(self.base_margin, other.base_margin)
        )

    def __repr__(self) -> str:
        indices = None if self.indices is None else self.indices.tolist()
        return (
            f"LabeledPoint(label={float(self.label)}, size={self.size}, indices={indices}, "
            f"values={self.values.tolist()}, weight={float(self.weight)}, "
            f"group={self.group}, base_margin={self.base_margin})"
        )


def _same_float(a: float, b: float) -> bool:
    return a == b or (math.isnan(a) and math.isnan(b))


def _same_optional_float(a: float | None, b: float | None) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return _same_float(a, b)
