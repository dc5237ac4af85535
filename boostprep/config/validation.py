"""Configuration validation functions."""

import math
from typing import Any

from .prep_config import PrepConfig

VALID_KEYS = set(PrepConfig.__dataclass_fields__)
BOOL_KEYS = {"deterministic_partition", "allow_non_zero_missing"}


def parse_missing(value: Any) -> float:
    """Parse a missing sentinel, accepting 'nan' spelled as a string."""
    if isinstance(value, str) and value.strip().lower() in {"nan", ".nan"}:
        return math.nan
    return float(value)


def validate_prep_config(config: dict[str, Any]) -> list[str]:
    """Validate a flat prep config mapping (checks keys, types and ranges)."""
    errors = []

    unknown = set(config) - VALID_KEYS
    if unknown:
        errors.append(f"Unknown config keys: {sorted(unknown)}. Must be among: {sorted(VALID_KEYS)}")

    if "num_workers" in config:
        value = config["num_workers"]
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"num_workers must be an integer, got {type(value).__name__}")
        elif value <= 0:
            errors.append(f"num_workers={value} must be positive")

    if config.get("max_threads") is not None:
        value = config["max_threads"]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(f"max_threads must be a positive integer or null, got {value!r}")

    for key in BOOL_KEYS:
        if key in config and not isinstance(config[key], bool):
            errors.append(f"{key} must be a boolean, got {type(config[key]).__name__}")

    if config.get("sanitize_groups") is not None and not isinstance(config["sanitize_groups"], bool):
        errors.append(
            f"sanitize_groups must be a boolean or null, got {type(config['sanitize_groups']).__name__}"
        )

    if "missing" in config:
        try:
            parse_missing(config["missing"])
        except (TypeError, ValueError):
            errors.append(f"missing must be a float or 'nan', got {config['missing']!r}")

    return errors
