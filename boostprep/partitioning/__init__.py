"""
Partition assignment and multi-dataset alignment.

Usage:
    from boostprep.partitioning import PartitionKeyAssigner, MultiDatasetAligner

    assigner = PartitionKeyAssigner(num_workers=4, deterministic_partition=True)
    keyed = [assigner.attach(row, point) for row, point in zip(rows, points)]
    train, = MultiDatasetAligner(4, deterministic_partition=True).align([keyed])
"""

from .keys import (
    PLACEHOLDER_KEY,
    PartitionKeyAssigner,
    assign_partition_key,
    check_num_workers,
    row_hash,
)
from .dataset import PartitionedDataset
from .aligner import (
    MultiDatasetAligner,
    align_datasets,
    bucket_by_key,
    cluster_groups,
    redistribute,
    redistribute_groups,
)

__all__ = [
    # Keys
    'PLACEHOLDER_KEY',
    'PartitionKeyAssigner',
    'assign_partition_key',
    'check_num_workers',
    'row_hash',
    # Dataset
    'PartitionedDataset',
    # Alignment
    'MultiDatasetAligner',
    'align_datasets',
    'bucket_by_key',
    'cluster_groups',
    'redistribute',
    'redistribute_groups',
]
