"""
boostprep - labeled-point dataset preparation for gradient boosting.

Converts tabular rows into LabeledPoint records, aligns several datasets
to a fixed number of workers, and strips missing-value sentinels from
feature vectors before they reach the training engine.

Usage:
    from boostprep import ColumnSpec, PrepConfig, prepare_datasets

    config = PrepConfig(num_workers=4, deterministic_partition=True, missing=0.0)
    train, valid = prepare_datasets([train_df, valid_df], ColumnSpec(weight_col='w'), config)
"""

import logging

from .exceptions import (
    ConfigError,
    ConfigValidationError,
    InvalidMissingValueError,
    SchemaError,
)
from .config import PrepConfig, load_prep_config
from .records import DenseVector, LabeledPoint, SparseVector, as_vector
from .conversion import ColumnSpec, RowConverter, RowSchema, convert_rows, select_rows
from .partitioning import (
    MultiDatasetAligner,
    PartitionedDataset,
    PartitionKeyAssigner,
    align_datasets,
    assign_partition_key,
    row_hash,
)
from .sanitization import (
    GroupSanitizer,
    MissingValueSanitizer,
    group_records,
    process_missing_values,
    process_missing_values_with_group,
)
from .pipeline import (
    convert_datasets,
    prepare_datasets,
    sanitize_group_partitions,
    sanitize_partitions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    'ConfigError',
    'ConfigValidationError',
    'InvalidMissingValueError',
    'SchemaError',
    # Config
    'PrepConfig',
    'load_prep_config',
    # Records
    'DenseVector',
    'LabeledPoint',
    'SparseVector',
    'as_vector',
    # Conversion
    'ColumnSpec',
    'RowConverter',
    'RowSchema',
    'convert_rows',
    'select_rows',
    # Partitioning
    'MultiDatasetAligner',
    'PartitionedDataset',
    'PartitionKeyAssigner',
    'align_datasets',
    'assign_partition_key',
    'row_hash',
    # Sanitization
    'GroupSanitizer',
    'MissingValueSanitizer',
    'group_records',
    'process_missing_values',
    'process_missing_values_with_group',
    # Pipeline
    'convert_datasets',
    'prepare_datasets',
    'sanitize_group_partitions',
    'sanitize_partitions',
]
