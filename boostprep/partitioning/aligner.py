"""
Multi-dataset partition alignment.

Given several datasets of (key, record) pairs and a worker count, produce
one PartitionedDataset per input with exactly num_workers partitions:

- deterministic: bucket by key % num_workers, so identical keys land on
  the same worker in every dataset
- otherwise: keep a dataset that already has num_workers partitions,
  else redistribute it round robin
- with a group key, whole ranking groups move together and stay contiguous
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Iterator, Sequence, TypeVar

from .dataset import PartitionedDataset
from .keys import check_num_workers

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

T = TypeVar("T")

KeyedDataset = PartitionedDataset[tuple[int, T]]
GroupKey = Callable[[T], Hashable]


def bucket_by_key(dataset: Iterable[tuple[int, T]], num_workers: int) -> PartitionedDataset[T]:
    """Stable key % num_workers bucketing; relative order is preserved per bucket."""
    buckets: list[list[T]] = [[] for _ in range(num_workers)]
    for key, record in dataset:
        buckets[key % num_workers].append(record)
    return PartitionedDataset(buckets)


def redistribute(dataset: Iterable[T], num_workers: int) -> PartitionedDataset[T]:
    """Round-robin redistribution; partition sizes differ by at most one."""
    buckets: list[list[T]] = [[] for _ in range(num_workers)]
    for i, record in enumerate(dataset):
        buckets[i % num_workers].append(record)
    return PartitionedDataset(buckets)


def cluster_groups(records: Iterable[T], group_key: GroupKey) -> list[list[T]]:
    """Collect records by group, groups in order of first appearance, records in input order."""
    groups: dict[Hashable, list[T]] = {}
    for record in records:
        groups.setdefault(group_key(record), []).append(record)
    return list(groups.values())


def redistribute_groups(dataset: Iterable[T], num_workers: int, group_key: GroupKey) -> PartitionedDataset[T]:
    """Round-robin redistribution of whole groups; a group never spans partitions."""
    buckets: list[list[T]] = [[] for _ in range(num_workers)]
    for i, group in enumerate(cluster_groups(dataset, group_key)):
        buckets[i % num_workers].extend(group)
    return PartitionedDataset(buckets)


def _drop_keys(dataset: KeyedDataset) -> PartitionedDataset[T]:
    return dataset.map_partitions(lambda part: [record for _, record in part])


def _as_partitioned(dataset: KeyedDataset | Iterable[tuple[int, T]]) -> KeyedDataset:
    if isinstance(dataset, PartitionedDataset):
        return dataset
    return PartitionedDataset([dataset])


def align_datasets(
    datasets: Sequence[KeyedDataset | Iterable[tuple[int, T]]],
    num_workers: int,
    deterministic_partition: bool,
    group_key: GroupKey | None = None,
) -> list[PartitionedDataset[T]]:
    """
    Align several keyed datasets to num_workers partitions each.

    Args:
        datasets: Keyed datasets; plain iterables count as a single partition
        num_workers: Target partition count
        deterministic_partition: Bucket by key instead of redistributing
        group_key: For ranking data, maps a record to its group id. Whole
            groups are then redistributed, and every output partition holds
            each of its groups as one contiguous run. Deterministic keys must
            already be equal within a group.

    Returns:
        One PartitionedDataset of records (keys discarded) per input dataset

    Raises:
        ConfigError: If num_workers <= 0
    """
    check_num_workers(num_workers)

    aligned = []
    for i, dataset in enumerate(datasets):
        dataset = _as_partitioned(dataset)
        if deterministic_partition:
            result = bucket_by_key(dataset, num_workers)
        elif dataset.num_partitions == num_workers:
            result = _drop_keys(dataset)
        elif group_key is not None:
            result = redistribute_groups((record for _, record in dataset), num_workers, group_key)
        else:
            result = redistribute((record for _, record in dataset), num_workers)
        if group_key is not None:
            result = result.map_partitions(
                lambda part: [r for group in cluster_groups(part, group_key) for r in group]
            )
        logger.debug(f"Dataset {i}: {dataset.num_partitions} -> {num_workers} partitions, counts={result.counts()}")
        aligned.append(result)
    return aligned


class MultiDatasetAligner:
    """Align datasets to a fixed worker count with a fixed partitioning rule."""

    def __init__(
        self,
        num_workers: int,
        deterministic_partition: bool = False,
        group_key: GroupKey | None = None,
    ) -> None:
        check_num_workers(num_workers)
        self.num_workers = int(num_workers)
        self.deterministic_partition = deterministic_partition
        self.group_key = group_key

    def align(self, datasets: Sequence[KeyedDataset | Iterable[tuple[int, T]]]) -> list[PartitionedDataset[T]]:
        return align_datasets(
            datasets, self.num_workers, self.deterministic_partition, group_key=self.group_key
        )

    @staticmethod
    def iter_worker(aligned: Sequence[PartitionedDataset[T]], worker: int) -> tuple[list[T], ...]:
        """The partitions a single worker receives, one per dataset."""
        return tuple(dataset.partition(worker) for dataset in aligned)

    def iter_workers(self, aligned: Sequence[PartitionedDataset[T]]) -> Iterator[tuple[list[T], ...]]:
        """Per-worker tuples of partitions, worker 0 first."""
        for worker in range(self.num_workers):
            yield self.iter_worker(aligned, worker)
