"""PrepConfig dataclass for dataset preparation settings."""
import math
from dataclasses import dataclass
from typing import Any

from ..exceptions import ConfigError


@dataclass
class PrepConfig:
    """Configuration for converting, aligning and sanitizing labeled-point datasets."""
    num_workers: int = 1
    deterministic_partition: bool = False
    missing: float = math.nan
    allow_non_zero_missing: bool = False
    # None keeps the legacy rule: a NaN sentinel disables group sanitization
    sanitize_groups: bool | None = None
    max_threads: int | None = None  # None lets the executor decide

    def __post_init__(self) -> None:
        """Validate and convert configuration values."""
        if isinstance(self.num_workers, bool) or not isinstance(self.num_workers, int):
            raise ConfigError(
                f"num_workers must be an integer, got {type(self.num_workers).__name__}"
            )
        if self.num_workers <= 0:
            raise ConfigError(f"num_workers must be positive, got {self.num_workers}")
        if self.max_threads is not None and self.max_threads <= 0:
            raise ConfigError(f"max_threads must be positive, got {self.max_threads}")
        try:
            self.missing = float(self.missing)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"missing must be a float, got {self.missing!r}") from e

    @property
    def group_sanitization_enabled(self) -> bool:
        """Whether ranking groups are filtered for the missing sentinel."""
        if self.sanitize_groups is None:
            return not math.isnan(self.missing)
        return self.sanitize_groups

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "num_workers": self.num_workers,
            "deterministic_partition": self.deterministic_partition,
            "missing": self.missing,
            "allow_non_zero_missing": self.allow_non_zero_missing,
            "sanitize_groups": self.sanitize_groups,
            "max_threads": self.max_threads,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrepConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
