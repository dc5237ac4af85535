"""Configuration path constants."""

from pathlib import Path

# Note: 2 levels up from boostprep/config/paths.py -> project root
CONFIG_ROOT = Path(__file__).resolve().parents[2] / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "boostprep.yaml"
