"""Configuration loading."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import CatFactsConfig


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "catfacts.yaml",
        Path.home() / ".catfacts" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config(config_path: Optional[Path] = None) -> CatFactsConfig:
    """Load configuration from file, falling back to defaults.

    Raises:
        ValueError: unreadable YAML or failed validation.
    """
    data = {}

    path = config_path or find_config()
    if path is not None:
        if not path.exists():
            raise ValueError(f"Config file not found: {path}")
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        return CatFactsConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
