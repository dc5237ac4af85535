"""
Row conversion - tabular rows to LabeledPoint records.

Usage:
    from boostprep.conversion import ColumnSpec, RowConverter, select_rows

    spec = ColumnSpec(label_col='y', features_col='x', group_col='qid')
    converter = RowConverter(spec.schema)
    points = [converter.convert(row) for row in select_rows(df, spec)]
"""

from .schema import ColumnSpec, RowSchema
from .converter import RowConverter, convert_rows
from .frames import (
    column_spec_for,
    feature_matrix_to_frame,
    select_columns,
    select_rows,
)

__all__ = [
    # Schema
    'ColumnSpec',
    'RowSchema',
    # Converter
    'RowConverter',
    'convert_rows',
    # Frames
    'column_spec_for',
    'feature_matrix_to_frame',
    'select_columns',
    'select_rows',
]
