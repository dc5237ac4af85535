"""
Record types for labeled-point datasets.

Usage:
    from boostprep.records import LabeledPoint, SparseVector

    point = LabeledPoint.from_vector(SparseVector(5, [0, 3], [1.0, 2.5]), label=1.0)
"""

from .vectors import (
    DenseVector,
    SparseVector,
    Vector,
    as_vector,
    check_sparse_indices,
)
from .labeled_point import LabeledPoint

__all__ = [
    # Vectors
    'DenseVector',
    'SparseVector',
    'Vector',
    'as_vector',
    'check_sparse_indices',
    # Records
    'LabeledPoint',
]
