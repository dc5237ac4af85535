"""
Dataset preparation pipeline.

Turns one or more tabular datasets into worker-aligned, sanitized
LabeledPoint partitions:

    rows -> RowConverter -> (key, LabeledPoint) -> align_datasets
         -> per-partition sanitization -> training engine

Partitions are sanitized concurrently with a thread pool; partitions share
no mutable state, so no locking is needed.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from operator import attrgetter
from typing import Any, Callable, Iterable, Sequence, TypeVar, Union

import pandas as pd

from .config import PrepConfig
from .conversion import ColumnSpec, RowConverter, RowSchema, select_rows
from .partitioning import MultiDatasetAligner, PartitionedDataset, PartitionKeyAssigner
from .records import LabeledPoint
from .sanitization import GroupSanitizer, MissingValueSanitizer, group_records

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

T = TypeVar("T")
U = TypeVar("U")

DatasetSource = Union[pd.DataFrame, Iterable[Any]]


def _rows(source: DatasetSource, spec: ColumnSpec) -> Iterable[Any]:
    if isinstance(source, pd.DataFrame):
        return select_rows(source, spec)
    return source


def convert_dataset(
    source: DatasetSource,
    converter: RowConverter,
    assigner: PartitionKeyAssigner,
    spec: ColumnSpec,
) -> list[tuple[int, LabeledPoint]]:
    """
    Convert one dataset into keyed LabeledPoints (a single input partition).

    Keys are computed from the converted record, so a row keys the same way
    whether it came from a DataFrame or a plain iterable. Ranking records
    are keyed by their group id, keeping each query on one worker.
    """
    by_group = converter.schema is RowSchema.WITH_GROUP
    keyed = []
    for row in _rows(source, spec):
        point = converter.convert(row)
        keyed.append(assigner.attach((point.group,) if by_group else point, point))
    return keyed


def convert_datasets(
    sources: Sequence[DatasetSource],
    spec: ColumnSpec,
    config: PrepConfig,
) -> list[PartitionedDataset[LabeledPoint]]:
    """
    Convert datasets to LabeledPoints and align them to config.num_workers.

    Args:
        sources: DataFrames, or iterables of rows already in canonical order
        spec: Column names; the row schema is resolved once from it
        config: Worker count and partitioning mode

    Returns:
        One PartitionedDataset per source, each with num_workers partitions

    Raises:
        SchemaError: If a row does not match the resolved schema
    """
    schema: RowSchema = spec.schema
    converter = RowConverter(schema)
    assigner = PartitionKeyAssigner(config.num_workers, config.deterministic_partition)
    aligner = MultiDatasetAligner(
        config.num_workers,
        config.deterministic_partition,
        group_key=attrgetter("group") if schema is RowSchema.WITH_GROUP else None,
    )

    start = time.perf_counter()
    keyed = [convert_dataset(source, converter, assigner, spec) for source in sources]
    aligned = aligner.align(keyed)
    elapsed = time.perf_counter() - start

    for i, dataset in enumerate(aligned):
        logger.info(
            f"Dataset {i}: {len(dataset):,} rows ({schema.name}) -> "
            f"{dataset.num_partitions} partitions {dataset.counts()}"
        )
    logger.info(f"Converted {len(aligned)} dataset(s) in {elapsed:.2f}s")
    return aligned


def _map_partitions_parallel(
    dataset: PartitionedDataset[T],
    fn: Callable[[Sequence[T]], list[U]],
    max_workers: int | None,
) -> PartitionedDataset[U]:
    """Run fn on every partition in a thread pool, keeping partition order."""
    if dataset.num_partitions == 0:
        return PartitionedDataset([])

    outputs: list[list[U] | None] = [None] * dataset.num_partitions

    def run(idx: int) -> tuple[int, list[U]]:
        return idx, fn(dataset.partition(idx))

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(run, i): i
            for i in range(dataset.num_partitions)
        }
        for future in as_completed(futures):
            idx, output = future.result()
            outputs[idx] = output
            logger.debug(f"Partition {idx}: {len(output):,} items sanitized")

    return PartitionedDataset(outputs)


def sanitize_partitions(
    dataset: PartitionedDataset[LabeledPoint],
    config: PrepConfig,
    max_workers: int | None = None,
) -> PartitionedDataset[LabeledPoint]:
    """
    Strip the missing sentinel from every partition concurrently.

    Raises:
        InvalidMissingValueError: If a partition holds sparse records and a
            non-zero sentinel was not explicitly allowed
    """
    sanitizer = MissingValueSanitizer(config.missing, config.allow_non_zero_missing)
    return _map_partitions_parallel(
        dataset,
        lambda part: list(sanitizer.sanitize(part)),
        max_workers if max_workers is not None else config.max_threads,
    )


def sanitize_group_partitions(
    dataset: PartitionedDataset[LabeledPoint],
    config: PrepConfig,
    max_workers: int | None = None,
) -> PartitionedDataset[list[LabeledPoint]]:
    """Group every partition into ranking groups and sanitize them concurrently."""
    sanitizer = GroupSanitizer(
        config.missing,
        config.allow_non_zero_missing,
        enabled=config.group_sanitization_enabled,
    )
    return _map_partitions_parallel(
        dataset,
        lambda part: [list(group) for group in sanitizer.sanitize(group_records(part))],
        max_workers if max_workers is not None else config.max_threads,
    )


def prepare_datasets(
    sources: Sequence[DatasetSource],
    spec: ColumnSpec,
    config: PrepConfig,
) -> list[PartitionedDataset]:
    """
    Full preparation: convert, align and sanitize every dataset.

    Ranking datasets (spec with a group column) come back as partitions of
    groups; other datasets as partitions of LabeledPoints.
    """
    aligned = convert_datasets(sources, spec, config)
    if spec.schema is RowSchema.WITH_GROUP:
        return [sanitize_group_partitions(d, config) for d in aligned]
    return [sanitize_partitions(d, config) for d in aligned]
