"""Configuration module: load the rule tables the analysis engine reads."""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from ..utils.errors import ConfigError
from ..utils.logging import get_logger
from .manager import read_yaml, merge_config
from .models import RuleTables, PriceEntry, StorageRate
from .paths import get_defaults_path, get_override_path

logger = get_logger("config")

__all__ = ["load_rule_tables", "default_rule_tables", "RuleTables", "PriceEntry", "StorageRate"]


def load_rule_tables(config_path: Optional[str] = None, use_overrides: bool = True) -> RuleTables:
    """
    Load rule tables: packaged defaults with an optional YAML override merged on top.
    
    Override resolution: explicit config_path, else .planrisk/config.yaml in the
    working directory, else ~/.planrisk/config.yaml.
    
    Args:
        config_path: Path to override YAML file. If None, searches project/user paths
        use_overrides: If False, return the packaged defaults only
        
    Returns:
        Validated, immutable RuleTables
        
    Raises:
        ConfigError: If a config file cannot be read or fails validation
    """
    config = read_yaml(get_defaults_path())
    
    override_path = None
    if config_path is not None:
        override_path = Path(config_path)
    elif use_overrides:
        override_path = get_override_path()
    
    if override_path is not None:
        config = merge_config(config, read_yaml(override_path))
        logger.info(f"Loaded rule table overrides from {override_path}")
    
    try:
        tables = RuleTables(**config)
    except ValidationError as e:
        source = override_path or get_defaults_path()
        raise ConfigError(f"Invalid rule table configuration ({source}): {e}")
    except TypeError as e:
        raise ConfigError(f"Invalid rule table configuration: {e}")
    
    logger.debug(
        f"Rule tables ready: {len(tables.pricing)} priced types, "
        f"{len(tables.stateful_types)} stateful types"
    )
    return tables


@lru_cache(maxsize=1)
def default_rule_tables() -> RuleTables:
    """Packaged default tables, built once per process and shared read-only."""
    return load_rule_tables(use_overrides=False)
