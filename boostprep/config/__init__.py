"""
Prep Configuration - dataclass settings and YAML loading.

Precedence: explicit overrides > YAML file > dataclass defaults
"""
from .paths import CONFIG_ROOT, DEFAULT_CONFIG_PATH
from .prep_config import PrepConfig
from .validation import parse_missing, validate_prep_config
from .loaders import flatten_prep_config, load_prep_config, load_yaml_config
from .serialization import save_prep_config
from ..exceptions import ConfigError, ConfigValidationError

__all__ = [
    # Paths
    "CONFIG_ROOT", "DEFAULT_CONFIG_PATH",
    # Exceptions
    "ConfigError", "ConfigValidationError",
    # PrepConfig
    "PrepConfig",
    # Validation
    "parse_missing", "validate_prep_config",
    # Loaders
    "load_yaml_config", "flatten_prep_config", "load_prep_config",
    # Serialization
    "save_prep_config",
]
