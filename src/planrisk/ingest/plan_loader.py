"""Load and validate Terraform plan JSON from a file, stdin or raw text."""

import json
from pathlib import Path
from typing import Dict, Any
from ..utils.errors import PlanLoadError
from ..utils.logging import get_logger
from .plan_validator import validate_plan_structure, get_plan_summary

logger = get_logger("ingest.plan_loader")


def parse_plan_text(text: str, source: str = "<input>") -> Dict[str, Any]:
    """
    Parse and validate Terraform plan JSON text.
    
    Args:
        text: Raw JSON text (file contents, stdin, pasted plan)
        source: Label for log messages
        
    Returns:
        Parsed and validated plan data
        
    Raises:
        PlanLoadError: If text is not JSON or not a plan with resource_changes
    """
    try:
        plan_data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlanLoadError(f"Invalid JSON: {e}")
    
    validate_plan_structure(plan_data)
    
    summary = get_plan_summary(plan_data)
    logger.info(
        f"Loaded Terraform plan from {source} "
        f"(version: {summary['terraform_version']}, "
        f"resources: {summary['resource_count']})"
    )
    return plan_data


def load_plan_json(plan_path: str) -> Dict[str, Any]:
    """
    Load and validate Terraform plan JSON file.
    
    Args:
        plan_path: Path to Terraform plan JSON file
        
    Returns:
        Parsed and validated plan data
        
    Raises:
        PlanLoadError: If file cannot be loaded or is invalid
    """
    path = Path(plan_path)
    
    if not path.exists():
        raise PlanLoadError(
            f"Plan file not found: {plan_path}. "
            "Please check the file path and ensure the file exists. "
            "Generate a plan using: terraform show -json plan.tfplan > plan.json"
        )
    
    if not path.is_file():
        raise PlanLoadError(
            f"Path is not a file: {plan_path}. "
            "Please provide a valid Terraform plan JSON file."
        )
    
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PlanLoadError(
            f"Error reading plan file: {e}. "
            "Please check file permissions and try again."
        )
    
    return parse_plan_text(text, source=str(path))
