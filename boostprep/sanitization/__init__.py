"""
Missing-value sanitization for labeled-point streams and ranking groups.

Usage:
    from boostprep.sanitization import MissingValueSanitizer, GroupSanitizer, group_records

    clean = list(MissingValueSanitizer(missing=float('nan')).sanitize(points))
    groups = list(GroupSanitizer(missing=0.0).sanitize(group_records(points)))
"""

from .missing import (
    MissingValueSanitizer,
    as_sentinel,
    keep_mask,
    process_missing_values,
    remove_missing,
    remove_missing_values,
    verify_missing_setting,
)
from .groups import (
    GroupSanitizer,
    group_records,
    process_missing_values_with_group,
    resolve_group_sanitization,
)

__all__ = [
    # Records
    'MissingValueSanitizer',
    'as_sentinel',
    'keep_mask',
    'process_missing_values',
    'remove_missing',
    'remove_missing_values',
    'verify_missing_setting',
    # Groups
    'GroupSanitizer',
    'group_records',
    'process_missing_values_with_group',
    'resolve_group_sanitization',
]
