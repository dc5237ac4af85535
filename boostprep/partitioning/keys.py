"""
Partition key assignment.

Deterministic keys are derived from a content hash of the row, computed
with hashlib so that the same row maps to the same worker in every
process and every run. Python's builtin hash() is salted per process and
is never used here.
"""

from __future__ import annotations

import hashlib
import numbers
import struct
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, TypeVar

import numpy as np

from ..exceptions import ConfigError, SchemaError
from ..records import DenseVector, LabeledPoint, SparseVector

T = TypeVar("T")

PLACEHOLDER_KEY = 1


def _encode(value: Any) -> bytes:
    """Canonical byte encoding of one row value."""
    if value is None:
        return b"N"
    if isinstance(value, (bool, np.bool_)):
        return b"B1" if value else b"B0"
    if isinstance(value, numbers.Integral):
        return b"I" + str(int(value)).encode()
    if isinstance(value, numbers.Real):
        return b"F" + struct.pack("<d", float(value))
    if isinstance(value, str):
        return b"U" + value.encode("utf-8")
    if isinstance(value, bytes):
        return b"Y" + value
    if isinstance(value, DenseVector):
        return b"D" + struct.pack("<q", value.size) + value.values.tobytes()
    if isinstance(value, SparseVector):
        return (
            b"S" + struct.pack("<q", value.size)
            + value.indices.tobytes() + b"|" + value.values.tobytes()
        )
    if isinstance(value, LabeledPoint):
        return b"P" + _encode_row(
            (value.label, value.features, value.weight, value.group, value.base_margin)
        )
    if isinstance(value, np.ndarray):
        arr = np.ascontiguousarray(value)
        return b"A" + arr.dtype.str.encode() + struct.pack("<q", arr.size) + arr.tobytes()
    if isinstance(value, (list, tuple)):
        return b"L" + _encode_row(value)
    raise SchemaError(f"Cannot hash row value of type {type(value).__name__}")


def _encode_row(values: Iterable[Any]) -> bytes:
    parts = []
    for v in values:
        encoded = _encode(v)
        parts.append(struct.pack("<q", len(encoded)) + encoded)
    return b"".join(parts)


def row_hash(row: Any) -> int:
    """
    Stable signed 64-bit hash of a row's content.

    Args:
        row: A tuple/list of column values, a mapping of column -> value,
            or a single LabeledPoint

    Returns:
        Signed 64-bit integer, identical across processes and runs
    """
    if isinstance(row, Mapping):
        payload = b"M" + _encode_row(
            (str(k), row[k]) for k in sorted(row, key=str)
        )
    elif isinstance(row, (list, tuple)):
        payload = b"R" + _encode_row(row)
    else:
        payload = _encode(row)
    digest = hashlib.blake2b(payload, digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


def check_num_workers(num_workers: int) -> None:
    """
    Raises:
        ConfigError: If num_workers is not a positive integer
    """
    if isinstance(num_workers, bool) or not isinstance(num_workers, numbers.Integral):
        raise ConfigError(f"num_workers must be an integer, got {type(num_workers).__name__}")
    if num_workers <= 0:
        raise ConfigError(f"num_workers must be positive, got {num_workers}")


def assign_partition_key(row: Any, deterministic_partition: bool, num_workers: int) -> int:
    """
    Compute the partition key of a row.

    Deterministic: abs(row_hash(row)) % num_workers, so identical rows always
    agree on their worker. Otherwise a placeholder key; the dataset is evenly
    redistributed later.
    """
    check_num_workers(num_workers)
    if deterministic_partition:
        return abs(row_hash(row)) % num_workers
    return PLACEHOLDER_KEY


class PartitionKeyAssigner:
    """Attach partition keys to converted records."""

    def __init__(self, num_workers: int, deterministic_partition: bool = False) -> None:
        check_num_workers(num_workers)
        self.num_workers = int(num_workers)
        self.deterministic_partition = deterministic_partition

    def key_for(self, row: Any) -> int:
        return assign_partition_key(row, self.deterministic_partition, self.num_workers)

    def attach(self, row: Any, record: T) -> tuple[int, T]:
        """Pair a record with the key computed from its source row."""
        return self.key_for(row), record

    def attach_all(self, pairs: Iterable[tuple[Any, T]]) -> Iterator[tuple[int, T]]:
        """Lazily key (row, record) pairs."""
        for row, record in pairs:
            yield self.attach(row, record)
