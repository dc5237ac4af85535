"""Configuration serialization functions."""
import logging
from pathlib import Path

import yaml

from .prep_config import PrepConfig

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def save_prep_config(config: PrepConfig, path: str | Path) -> None:
    """Save configuration to YAML file under a 'prep' section."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump({"prep": config.to_dict()}, f, default_flow_style=False, sort_keys=False)
    logger.info(f"Saved config to {path}")
