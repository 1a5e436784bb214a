"""YAML loading and merging for rule table configuration."""

import yaml
from pathlib import Path
from typing import Dict, Any
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.manager")


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping from disk.
    
    Args:
        path: Path to YAML file
        
    Returns:
        Parsed mapping (empty dict for an empty file)
        
    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}")
    
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a dictionary: {path}")
    return data


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new dict with override deep-merged over base. Lists are replaced, not extended."""
    merged = dict(base)
    _deep_merge(merged, override)
    return merged


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override into base (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            base[key] = dict(base[key])
            _deep_merge(base[key], value)
        else:
            base[key] = value
