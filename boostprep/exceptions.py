"""Exceptions raised while preparing labeled-point datasets."""
from typing import List


class SchemaError(ValueError):
    """Raised when a row does not match an accepted column layout."""
    pass


class ConfigError(Exception):
    """Raised when configuration loading, parsing or validation fails."""
    pass


class ConfigValidationError(ConfigError):
    """Raised when a configuration mapping fails validation."""
    def __init__(self, errors: List[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {errors}")


class InvalidMissingValueError(RuntimeError):
    """Raised when a non-zero missing sentinel is used with sparse input."""

    def __init__(self, missing: float) -> None:
        self.missing = missing
        super().__init__(
            f"you can only specify missing value as 0.0 (the currently set value {missing}) "
            f"when you have sparse or empty vectors as your feature format. If your feature "
            f"vectors were built in a way that preserves zeros, you can avoid this check by "
            f"setting allow_non_zero_missing=True (only use if you know what you are doing)"
        )


__all__ = [
    "SchemaError",
    "ConfigError",
    "ConfigValidationError",
    "InvalidMissingValueError",
]
