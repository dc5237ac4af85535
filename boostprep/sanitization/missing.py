"""
Missing-value sanitization for LabeledPoint streams.

Entries equal to the missing sentinel are stripped from each record's
feature vector. The surviving entries keep their original positions as
explicit sparse indices, so the output is always sparse-shaped and the
declared size never changes.

A non-zero sentinel is rejected for records that are already sparse:
once zeros are implicit they cannot be told apart from filtered
sentinel entries. allow_non_zero_missing overrides the check.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator

import numpy as np

from ..exceptions import InvalidMissingValueError
from ..records import LabeledPoint

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def as_sentinel(missing: float) -> float:
    """The sentinel at the float32 precision of record values."""
    return float(np.float32(missing))


def keep_mask(values: np.ndarray, missing: float) -> np.ndarray:
    """Boolean mask of entries that are not the sentinel (NaN-aware)."""
    sentinel = np.float32(missing)
    if np.isnan(sentinel):
        return ~np.isnan(values)
    return values != sentinel


def remove_missing(point: LabeledPoint, missing: float) -> LabeledPoint:
    """Copy of the point without sentinel-valued entries."""
    mask = keep_mask(point.values, missing)
    if point.indices is None:
        indices = np.flatnonzero(mask).astype(np.int32)
    else:
        indices = point.indices[mask]
    return point.replace(indices=indices, values=point.values[mask])


def verify_missing_setting(
    points: Iterable[LabeledPoint],
    missing: float,
    allow_non_zero_missing: bool,
) -> Iterator[LabeledPoint]:
    """
    Lazily reject sparse records when a non-zero sentinel is not allowed.

    Raises:
        InvalidMissingValueError: On the first sparse record, when missing is non-zero
            at float32 precision and allow_non_zero_missing is False
    """
    if as_sentinel(missing) != 0.0 and not allow_non_zero_missing:
        for point in points:
            if point.indices is not None:
                raise InvalidMissingValueError(missing)
            yield point
    else:
        yield from points


def remove_missing_values(points: Iterable[LabeledPoint], missing: float) -> Iterator[LabeledPoint]:
    """Lazily strip sentinel entries from every record."""
    for point in points:
        yield remove_missing(point, missing)


def process_missing_values(
    points: Iterable[LabeledPoint],
    missing: float,
    allow_non_zero_missing: bool,
) -> Iterator[LabeledPoint]:
    """Verify the sentinel setting, then strip sentinel entries."""
    missing = as_sentinel(missing)
    return remove_missing_values(
        verify_missing_setting(points, missing, allow_non_zero_missing),
        missing,
    )


class MissingValueSanitizer:
    """Strip a missing sentinel from LabeledPoint streams."""

    def __init__(self, missing: float = math.nan, allow_non_zero_missing: bool = False) -> None:
        self.missing = as_sentinel(missing)
        self.allow_non_zero_missing = allow_non_zero_missing
        if allow_non_zero_missing and self.missing != 0.0:
            logger.warning(
                f"allow_non_zero_missing is set: sparse records will be filtered for "
                f"missing={self.missing}, implicit zeros are kept as zeros"
            )

    def sanitize(self, points: Iterable[LabeledPoint]) -> Iterator[LabeledPoint]:
        return process_missing_values(points, self.missing, self.allow_non_zero_missing)

    def sanitize_record(self, point: LabeledPoint) -> LabeledPoint:
        return next(self.sanitize([point]))

    def __call__(self, points: Iterable[LabeledPoint]) -> Iterator[LabeledPoint]:
        return self.sanitize(points)
