"""
config_loader.py
- Loads and previews the optional YAML resource definition file.
- A missing file means "use defaults"; a malformed one is fatal.
"""

import os

import yaml
from loguru import logger

from kubedemo.core.errors import ConfigError


def load_yaml(path):
    """Load a YAML mapping from path. Returns {} when the file does not exist."""
    if not path or not os.path.exists(path):
        logger.debug(f"[config] No resource file at {path}, using defaults.")
        return {}

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def preview_yaml(path, name=None):
    """
    Log a human-readable preview of the YAML file contents for debugging.
    Typically used during startup to verify which overrides are in effect.
    """
    if not path or not os.path.exists(path):
        return

    try:
        with open(path, "r") as f:
            contents = f.read()
    except OSError as e:
        logger.warning(f"[config] Could not preview {path}: {e}")
        return

    logger.debug(f"\n📄 Loaded {name or path}:\n" + "\n".join(f"│ {line}" for line in contents.strip().splitlines()))
