"""Config path resolution for the packaged defaults and the two-tier override files."""

from pathlib import Path
from typing import Optional


def get_defaults_path() -> Path:
    """Get packaged default rule tables: planrisk/config/defaults.yaml"""
    return Path(__file__).parent / "defaults.yaml"


def get_user_config_path() -> Path:
    """Get user config path: ~/.planrisk/config.yaml"""
    home = Path.home()
    return home / ".planrisk" / "config.yaml"


def get_project_config_path() -> Optional[Path]:
    """Get project config path: .planrisk/config.yaml (from current working directory)"""
    cwd = Path.cwd()
    project_config = cwd / ".planrisk" / "config.yaml"
    if project_config.exists():
        return project_config
    return None


def get_override_path() -> Optional[Path]:
    """
    Resolve override location (project first, then user).
    
    Returns:
        Path to override file, or None if neither exists
    """
    project_config = get_project_config_path()
    if project_config:
        return project_config
    user_config = get_user_config_path()
    if user_config.exists():
        return user_config
    return None
