"""
config_loader.py
- Loads and previews the optional YAML file that overrides entrypoint defaults.
- A missing or unreadable file is never fatal; the environment still applies.
"""

import os
import yaml
from loguru import logger


def load_yaml(path):
    """Safely load a YAML mapping. Returns {} when the file is absent or invalid."""
    if not path or not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"[config] Failed to load {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"[config] Ignoring {path}: top level must be a mapping")
        return {}
    return data


def preview_yaml(path, name=None):
    """
    Log a human-readable preview of the YAML file at DEBUG level.
    Used at startup to verify which overrides are mounted into the container.
    """
    if not path or not os.path.exists(path):
        logger.debug(f"[config] No config file at {path}")
        return

    try:
        with open(path, "r") as f:
            contents = f.read()
    except OSError as e:
        logger.error(f"[config] Could not preview {path}: {e}")
        return
    logger.debug(f"[config] Loaded {name or path}:\n" + "\n".join(f"│ {line}" for line in contents.strip().splitlines()))
