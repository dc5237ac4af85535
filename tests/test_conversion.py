"""
Tests for row schemas, RowConverter and DataFrame selection.

Run with: pytest tests/test_conversion.py -v
"""
import math

import numpy as np
import pandas as pd
import pytest

from boostprep.conversion import (
    ColumnSpec,
    RowConverter,
    RowSchema,
    column_spec_for,
    convert_rows,
    feature_matrix_to_frame,
    select_rows,
)
from boostprep.exceptions import SchemaError
from boostprep.records import DenseVector, SparseVector


# =============================================================================
# SCHEMA TESTS
# =============================================================================

class TestRowSchema:
    """Tests for schema resolution."""

    def test_resolve_with_group(self):
        schema = RowSchema.resolve(['label', 'features', 'weight', 'group', 'base_margin'])
        assert schema is RowSchema.WITH_GROUP

    def test_resolve_without_group(self):
        schema = RowSchema.resolve(['label', 'features', 'weight', 'base_margin'])
        assert schema is RowSchema.WITHOUT_GROUP

    def test_resolve_rejects_other_layouts(self):
        """Anything but the two canonical layouts is a SchemaError."""
        with pytest.raises(SchemaError):
            RowSchema.resolve(['label', 'features'])

    def test_column_spec_selects_schema(self):
        assert ColumnSpec().schema is RowSchema.WITHOUT_GROUP
        assert ColumnSpec(group_col='qid').schema is RowSchema.WITH_GROUP

    def test_column_spec_selected_columns_order(self):
        """Source columns follow canonical order; absent optionals map to None."""
        spec = ColumnSpec(label_col='y', features_col='x', group_col='qid')
        assert list(spec.selected_columns().items()) == [
            ('label', 'y'), ('features', 'x'), ('weight', None),
            ('group', 'qid'), ('base_margin', None),
        ]
        assert spec.required_columns() == ['y', 'x', 'qid']


# =============================================================================
# CONVERTER TESTS
# =============================================================================

class TestRowConverter:
    """Tests for row -> LabeledPoint conversion."""

    def test_dense_row(self):
        """Dense features produce indices=None and float32 values."""
        point = RowConverter(RowSchema.WITHOUT_GROUP).convert(
            (1.0, DenseVector([1.0, 0.0, 2.0]), 0.5, None)
        )
        assert point.indices is None
        assert point.values.dtype == np.float32
        assert point.values.tolist() == [1.0, 0.0, 2.0]
        assert point.size == 3
        assert point.weight == 0.5
        assert point.base_margin is None

    def test_sparse_row(self):
        """Sparse features keep their index list."""
        point = RowConverter(RowSchema.WITHOUT_GROUP).convert(
            (0.0, SparseVector(6, [1, 5], [3.0, 4.0]), 1.0, 0.1)
        )
        assert point.indices.tolist() == [1, 5]
        assert point.indices.dtype == np.int32
        assert point.size == 6
        assert point.base_margin == np.float32(0.1)

    def test_row_with_group(self):
        point = RowConverter(RowSchema.WITH_GROUP).convert(
            (2.0, [1.0, 2.0], 1.0, 7, math.nan)
        )
        assert point.group == 7
        assert math.isnan(point.base_margin)

    def test_mapping_row(self):
        """Mappings keyed by canonical names are accepted."""
        point = RowConverter(RowSchema.WITHOUT_GROUP).convert({
            'label': 1.0, 'features': [0.0, 1.0], 'weight': 1.0, 'base_margin': None,
        })
        assert point.size == 2

    def test_wrong_arity_raises(self):
        """A 5-column row under the 4-column schema is a SchemaError."""
        converter = RowConverter(RowSchema.WITHOUT_GROUP)
        with pytest.raises(SchemaError, match="expects 4"):
            converter.convert((1.0, [1.0], 1.0, 3, 0.0))

    def test_mapping_with_wrong_columns_raises(self):
        converter = RowConverter(RowSchema.WITH_GROUP)
        with pytest.raises(SchemaError):
            converter.convert({'label': 1.0, 'features': [1.0], 'weight': 1.0, 'base_margin': 0.0})

    def test_non_vector_features_raise(self):
        with pytest.raises(SchemaError):
            RowConverter(RowSchema.WITHOUT_GROUP).convert((1.0, 'abc', 1.0, None))

    def test_non_numeric_label_raises(self):
        with pytest.raises(SchemaError, match="label"):
            RowConverter(RowSchema.WITHOUT_GROUP).convert(('yes', [1.0], 1.0, None))

    def test_float_group_raises(self):
        """Group ids must be integers."""
        with pytest.raises(SchemaError, match="group"):
            RowConverter(RowSchema.WITH_GROUP).convert((1.0, [1.0], 1.0, 1.5, None))

    def test_convert_rows_is_lazy(self):
        """Errors surface only when the bad row is reached."""
        rows = [(1.0, [1.0], 1.0, None), (1.0, [1.0], 1.0)]
        points = convert_rows(rows, RowSchema.WITHOUT_GROUP)
        assert next(points).size == 1
        with pytest.raises(SchemaError):
            next(points)


# =============================================================================
# DATAFRAME SELECTION TESTS
# =============================================================================

class TestSelectRows:
    """Tests for DataFrame column selection and casting."""

    def test_select_rows_defaults(self, feature_frame):
        """Absent weight becomes 1.0 and absent base margin None."""
        spec = ColumnSpec(label_col='y', features_col='x')
        rows = list(select_rows(feature_frame, spec))
        assert len(rows) == len(feature_frame)
        label, features, weight, base_margin = rows[0]
        assert isinstance(label, np.float32)
        assert weight == 1.0
        assert base_margin is None
        assert len(features) == 6

    def test_select_rows_with_optional_columns(self, feature_frame):
        spec = ColumnSpec(label_col='y', features_col='x', weight_col='w', base_margin_col='margin')
        label, _, weight, base_margin = next(select_rows(feature_frame, spec))
        assert weight == np.float32(feature_frame['w'].iloc[0])
        assert base_margin == np.float32(feature_frame['margin'].iloc[0])

    def test_select_rows_group_cast_to_int32(self, ranking_frame):
        spec = ColumnSpec(label_col='rel', features_col='x', group_col='qid')
        rows = list(select_rows(ranking_frame, spec))
        assert isinstance(rows[0][3], np.int32)

    def test_missing_column_raises(self, feature_frame):
        """Naming a column the frame lacks is a SchemaError."""
        with pytest.raises(SchemaError, match="missing columns"):
            list(select_rows(feature_frame, ColumnSpec(label_col='y', features_col='x', group_col='qid')))

    def test_uncastable_column_raises(self, feature_frame):
        frame = feature_frame.assign(y='a')
        with pytest.raises(SchemaError, match="cannot be cast"):
            list(select_rows(frame, ColumnSpec(label_col='y', features_col='x')))

    def test_feature_matrix_to_frame(self):
        """A 2-D matrix becomes one dense vector per row."""
        X = np.arange(6, dtype=np.float32).reshape(3, 2)
        frame = feature_matrix_to_frame(X, np.array([0, 1, 0]), weight=np.ones(3))
        spec = column_spec_for(frame)
        assert spec.weight_col == 'weight'
        assert spec.group_col is None
        rows = list(select_rows(frame, spec))
        point = RowConverter(spec.schema).convert(rows[2])
        assert point.values.tolist() == [4.0, 5.0]

    def test_feature_matrix_length_mismatch(self):
        with pytest.raises(SchemaError):
            feature_matrix_to_frame(np.zeros((3, 2)), np.zeros(2))

    def test_empty_frame(self):
        frame = pd.DataFrame({'label': pd.Series([], dtype=float), 'features': pd.Series([], dtype=object)})
        assert list(select_rows(frame, ColumnSpec())) == []
