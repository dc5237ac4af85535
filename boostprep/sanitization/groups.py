"""
Group-aware sanitization for ranking data.

Each group (the records of one query) is sanitized independently; group
membership and order never change, only in-record feature content.
"""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

from ..records import LabeledPoint
from .missing import MissingValueSanitizer, as_sentinel, process_missing_values


def resolve_group_sanitization(missing: float, enabled: bool | None) -> bool:
    """An unset flag falls back to: a NaN sentinel disables group sanitization."""
    if enabled is None:
        return not math.isnan(missing)
    return enabled


def process_missing_values_with_group(
    groups: Iterable[Sequence[LabeledPoint]],
    missing: float,
    allow_non_zero_missing: bool,
    enabled: bool | None = None,
) -> Iterator[Sequence[LabeledPoint]]:
    """
    Sanitize each group's records independently.

    When sanitization is disabled the groups are yielded unchanged (the same
    objects). Otherwise every group is yielded as a new list.
    """
    if not resolve_group_sanitization(missing, enabled):
        yield from groups
        return

    for group in groups:
        yield list(process_missing_values(group, missing, allow_non_zero_missing))


def group_records(points: Iterable[LabeledPoint]) -> Iterator[list[LabeledPoint]]:
    """Split a record stream into runs of consecutive records with the same group id."""
    current: list[LabeledPoint] = []
    for point in points:
        if current and point.group != current[-1].group:
            yield current
            current = []
        current.append(point)
    if current:
        yield current


class GroupSanitizer:
    """Apply missing-value sanitization across ranking groups."""

    def __init__(
        self,
        missing: float = math.nan,
        allow_non_zero_missing: bool = False,
        enabled: bool | None = None,
    ) -> None:
        self.missing = as_sentinel(missing)
        self.allow_non_zero_missing = allow_non_zero_missing
        self.enabled = resolve_group_sanitization(self.missing, enabled)
        self._sanitizer = MissingValueSanitizer(self.missing, allow_non_zero_missing) if self.enabled else None

    def sanitize(self, groups: Iterable[Sequence[LabeledPoint]]) -> Iterator[Sequence[LabeledPoint]]:
        if self._sanitizer is None:
            yield from groups
            return
        for group in groups:
            yield list(self._sanitizer.sanitize(group))

    def __call__(self, groups: Iterable[Sequence[LabeledPoint]]) -> Iterator[Sequence[LabeledPoint]]:
        return self.sanitize(groups)
