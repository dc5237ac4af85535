"""Loading of boostprep YAML config files (config/boostprep.yaml and friends)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import ConfigError, ConfigValidationError
from .paths import DEFAULT_CONFIG_PATH
from .prep_config import PrepConfig
from .validation import parse_missing, validate_prep_config

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def load_yaml_config(
    path: str | Path,
    explicit: bool = False,
) -> dict[str, Any]:
    """
    Read a boostprep config file into a mapping.

    Args:
        path: YAML file holding a 'prep' section or flat PrepConfig fields
        explicit: The caller named this file, so every failure is a ConfigError.
                 Otherwise the file was found by default lookup and a missing
                 file or bad YAML propagates as FileNotFoundError / yaml.YAMLError.

    Returns:
        The parsed mapping, empty for an empty file

    Raises:
        ConfigError: If explicit and the file is missing or unreadable, or if
            the document is not a mapping
        FileNotFoundError: If the file is missing and explicit=False
        yaml.YAMLError: If the YAML is invalid and explicit=False
    """
    path = Path(path)

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"boostprep config not found: {path.absolute()} "
                f"(the default lives at {DEFAULT_CONFIG_PATH})"
            )
        raise FileNotFoundError(f"boostprep config not found: {path}")

    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        if explicit:
            raise ConfigError(f"Invalid YAML in boostprep config {path.absolute()}: {e}") from e
        raise

    if document is None:
        logger.warning(f"boostprep config {path} is empty, using PrepConfig defaults")
        return {}

    if not isinstance(document, dict):
        raise ConfigError(
            f"boostprep config {path} must be a mapping with a 'prep' section, "
            f"got {type(document).__name__}"
        )

    logger.debug(f"Read boostprep config {path}: sections={sorted(document)}")
    return document


def flatten_prep_config(config: dict[str, Any]) -> dict[str, Any]:
    """Take the 'prep' section if present, otherwise treat the mapping as flat."""
    section = config.get("prep", config)
    if not isinstance(section, dict):
        raise ConfigError(f"'prep' section must be a mapping, got {type(section).__name__}")
    return dict(section)


def load_prep_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    explicit: bool = True,
) -> PrepConfig:
    """
    Load a PrepConfig from YAML.

    Args:
        path: Path to YAML file (defaults to config/boostprep.yaml)
        overrides: Values applied on top of the file contents
        explicit: Fail hard on loading errors (see load_yaml_config)

    Returns:
        Validated PrepConfig

    Raises:
        ConfigValidationError: If the merged values fail validation
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    raw = flatten_prep_config(load_yaml_config(path, explicit=explicit))
    if overrides:
        raw.update(overrides)

    errors = validate_prep_config(raw)
    if errors:
        raise ConfigValidationError(errors)

    if "missing" in raw:
        raw["missing"] = parse_missing(raw["missing"])

    config = PrepConfig.from_dict(raw)
    logger.info(
        f"Prep config: num_workers={config.num_workers}, "
        f"deterministic_partition={config.deterministic_partition}, missing={config.missing}"
    )
    return config
