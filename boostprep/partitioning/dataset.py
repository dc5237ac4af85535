"""In-memory partitioned dataset: an ordered list of partitions."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class PartitionedDataset(Generic[T]):
    """
    Ordered collection of partitions, each an ordered list of items.

    Partition i is the slice consumed by worker i once the dataset has been
    aligned to the worker count.
    """

    def __init__(self, partitions: Iterable[Iterable[T]]) -> None:
        self._partitions: list[list[T]] = [list(p) for p in partitions]

    @classmethod
    def from_records(cls, records: Iterable[T], num_partitions: int = 1) -> PartitionedDataset[T]:
        """Split records into contiguous, nearly equal partitions (order kept)."""
        if num_partitions <= 0:
            raise ValueError(f"num_partitions must be positive, got {num_partitions}")
        items = list(records)
        base, extra = divmod(len(items), num_partitions)
        partitions = []
        start = 0
        for i in range(num_partitions):
            end = start + base + (1 if i < extra else 0)
            partitions.append(items[start:end])
            start = end
        return cls(partitions)

    @property
    def num_partitions(self) -> int:
        return len(self._partitions)

    @property
    def partitions(self) -> list[list[T]]:
        return self._partitions

    def partition(self, index: int) -> list[T]:
        return self._partitions[index]

    def counts(self) -> list[int]:
        """Number of items per partition."""
        return [len(p) for p in self._partitions]

    def map_partitions(self, fn: Callable[[Sequence[T]], Iterable[U]]) -> PartitionedDataset[U]:
        """Apply fn to every partition, keeping the partitioning."""
        return PartitionedDataset(fn(p) for p in self._partitions)

    def __len__(self) -> int:
        return sum(len(p) for p in self._partitions)

    def __iter__(self) -> Iterator[T]:
        for partition in self._partitions:
            yield from partition

    def __repr__(self) -> str:
        return f"PartitionedDataset(num_partitions={self.num_partitions}, counts={self.counts()})"
