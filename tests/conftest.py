"""
Shared fixtures for boostprep tests.
"""
import math

import numpy as np
import pandas as pd
import pytest

from boostprep.records import LabeledPoint, SparseVector


@pytest.fixture
def dense_point() -> LabeledPoint:
    """Dense point with a zero and a NaN among its values."""
    return LabeledPoint(1.0, 5, None, [0.5, 0.0, math.nan, 2.0, 0.0], weight=2.0, base_margin=0.25)


@pytest.fixture
def sparse_point() -> LabeledPoint:
    """Sparse point of size 10 with one entry equal to 0.5."""
    return LabeledPoint(0.0, 10, [1, 4, 7], [0.5, 3.0, -1.0], group=3)


@pytest.fixture
def feature_frame() -> pd.DataFrame:
    """Small frame with dense feature vectors and weight/base margin columns."""
    np.random.seed(42)
    n_rows = 40
    X = np.random.randn(n_rows, 6).astype(np.float32)
    X[X < -0.5] = 0.0

    return pd.DataFrame({
        'y': np.random.choice([0.0, 1.0], n_rows),
        'x': list(X),
        'w': np.random.uniform(0.5, 2.0, n_rows),
        'margin': np.random.randn(n_rows),
    })


@pytest.fixture
def ranking_frame() -> pd.DataFrame:
    """Frame of 5 query groups with 4 documents each and sparse features."""
    np.random.seed(7)
    rows = []
    for qid in range(5):
        for doc in range(4):
            indices = np.sort(np.random.choice(8, size=3, replace=False))
            values = np.random.choice([0.0, 1.0, 2.5], size=3)
            rows.append({
                'rel': float(doc % 3),
                'x': SparseVector(8, indices, values),
                'qid': qid,
            })
    return pd.DataFrame(rows)

