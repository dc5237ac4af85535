"""
Tests for handing records to the XGBoost engine.

Run with: pytest tests/test_engine.py -v
"""
import math

import numpy as np
import pytest

from boostprep.engine import build_dmatrix, group_sizes, records_to_csr
from boostprep.records import LabeledPoint
from boostprep.sanitization import process_missing_values


@pytest.fixture
def records():
    return [
        LabeledPoint(1.0, 4, None, [1.0, 0.0, 2.0, 0.0], weight=2.0, group=0, base_margin=0.1),
        LabeledPoint(0.0, 4, [1, 3], [5.0, 6.0], group=0, base_margin=0.2),
        LabeledPoint(1.0, 4, [0], [7.0], group=1, base_margin=0.3),
    ]


class TestRecordsToCsr:
    """Tests for CSR stacking."""

    def test_shape_and_values(self, records):
        mat = records_to_csr(records)
        assert mat.shape == (3, 4)
        assert mat.toarray().tolist() == [
            [1.0, 0.0, 2.0, 0.0],
            [0.0, 5.0, 0.0, 6.0],
            [7.0, 0.0, 0.0, 0.0],
        ]

    def test_sanitized_entries_are_not_stored(self, records):
        """Filtered positions disappear from the stored entries."""
        clean = list(process_missing_values(records[:1], 0.0, False))
        mat = records_to_csr(clean)
        assert mat.nnz == 2

    def test_num_features_too_small(self, records):
        with pytest.raises(ValueError):
            records_to_csr(records, num_features=2)


class TestBuildDMatrix:
    """Tests for DMatrix construction."""

    def test_labels_weights_margins(self, records):
        dmatrix = build_dmatrix(records)
        assert dmatrix.num_row() == 3
        assert dmatrix.num_col() == 4
        np.testing.assert_allclose(dmatrix.get_label(), [1.0, 0.0, 1.0])
        np.testing.assert_allclose(dmatrix.get_weight(), [2.0, 1.0, 1.0])
        np.testing.assert_allclose(dmatrix.get_base_margin(), [0.1, 0.2, 0.3], rtol=1e-6)

    def test_group_sizes(self, records):
        assert group_sizes(records) == [2, 1]
        assert group_sizes([LabeledPoint(0.0, 1, None, [1.0])]) is None

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty"):
            build_dmatrix([])

    def test_without_base_margin(self):
        dmatrix = build_dmatrix([LabeledPoint(0.0, 2, None, [1.0, math.nan])])
        assert dmatrix.num_row() == 1
