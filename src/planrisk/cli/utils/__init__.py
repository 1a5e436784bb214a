"""CLI utilities package."""

import json
import sys
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from ...contracts.analysis_output import PlanAnalysis
from ...utils.errors import PlanRiskError, PlanLoadError
from ...utils.logging import get_logger
from .file_resolver import resolve_file_path

logger = get_logger("cli.utils")

STDIN_MARKER = "-"


def format_error(message: str, suggestion: Optional[str] = None) -> str:
    """
    Format error message with optional suggestion.
    
    Args:
        message: Error message
        suggestion: Optional suggestion or help text
        
    Returns:
        Formatted error string
    """
    error = f"Error: {message}"
    if suggestion:
        error += f"\nTip: {suggestion}"
    return error


def run_analysis(plan_json: str, config_path: Optional[str] = None) -> PlanAnalysis:
    """
    Shared analysis execution helper - all commands call this.
    
    Args:
        plan_json: Path to Terraform plan JSON file, or "-" for stdin
        config_path: Optional rule table override file
        
    Returns:
        PlanAnalysis
        
    Raises:
        PlanRiskError: If input is malformed or analysis fails
    """
    from ... import analyze_file, analyze_text
    
    if plan_json == STDIN_MARKER:
        return analyze_text(sys.stdin.read(), config_path)
    
    try:
        plan_path = resolve_file_path(plan_json)
    except FileNotFoundError as e:
        raise PlanLoadError(str(e))
    return analyze_file(str(plan_path), config_path)


def load_analysis_json(analysis_path: str) -> PlanAnalysis:
    """
    Load a PlanAnalysis previously written by `planrisk analyze --json`.
    
    Raises:
        PlanRiskError: If the file is not valid JSON or not an analysis
    """
    path = Path(analysis_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise PlanRiskError(f"Invalid JSON in analysis file: {e}")
    except OSError as e:
        raise PlanRiskError(f"Error reading analysis file: {e}")
    
    try:
        return PlanAnalysis(**data)
    except (ValidationError, TypeError) as e:
        raise PlanRiskError(f"File is not a planrisk analysis: {e}")


__all__ = ["resolve_file_path", "run_analysis", "format_error", "load_analysis_json", "STDIN_MARKER"]
