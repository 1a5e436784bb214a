"""Validate Terraform plan JSON structure."""

from typing import Dict, Any, List
from ..utils.errors import PlanLoadError
from ..utils.logging import get_logger

logger = get_logger("ingest.plan_validator")

SUPPORTED_FORMAT_VERSIONS = ["1.0", "1.1", "1.2", "1.3", "1.4", "1.5"]
MISSING_RESOURCE_CHANGES = 'Invalid Terraform plan: missing "resource_changes" field'


def validate_plan_structure(plan_data: Any) -> None:
    """
    Validate Terraform plan JSON structure.
    
    A plan is structurally valid when it is a mapping holding a
    resource_changes list. Anything else is malformed input.
    
    Args:
        plan_data: Parsed Terraform plan JSON
        
    Raises:
        PlanLoadError: If plan structure is invalid
    """
    if not isinstance(plan_data, dict):
        raise PlanLoadError(
            "Plan JSON must be an object. "
            "Please ensure you're using a valid Terraform plan JSON file."
        )
    
    if "resource_changes" not in plan_data or plan_data["resource_changes"] is None:
        raise PlanLoadError(MISSING_RESOURCE_CHANGES)
    
    if not isinstance(plan_data["resource_changes"], list):
        raise PlanLoadError(
            "Plan 'resource_changes' must be a list. "
            "This may not be a valid Terraform plan JSON file."
        )
    
    # Validate format_version
    format_version = plan_data.get("format_version")
    if format_version is not None:
        if not isinstance(format_version, str):
            raise PlanLoadError(
                "Plan 'format_version' must be a string. "
                "This may not be a valid Terraform plan JSON file."
            )
        
        version_major_minor = ".".join(format_version.split(".")[:2])
        if version_major_minor not in SUPPORTED_FORMAT_VERSIONS:
            logger.warning(
                f"Plan format version '{format_version}' may not be fully supported. "
                f"Supported versions: {', '.join(SUPPORTED_FORMAT_VERSIONS)}"
            )
    
    terraform_version = plan_data.get("terraform_version")
    if terraform_version is not None and not isinstance(terraform_version, str):
        raise PlanLoadError(
            "Plan 'terraform_version' must be a string. "
            "This may not be a valid Terraform plan JSON file."
        )
    
    logger.debug("Plan structure validation passed")


def validate_resource_change(resource: Any) -> List[str]:
    """
    Validate a single resource change structure.
    
    Args:
        resource: Resource change dictionary
        
    Returns:
        List of validation warnings (empty if valid)
    """
    warnings = []
    
    if not isinstance(resource, dict):
        warnings.append("Resource change must be a dictionary")
        return warnings
    
    required_fields = ["address", "type", "change"]
    missing_fields = [field for field in required_fields if field not in resource]
    
    if missing_fields:
        warnings.append(f"Missing required fields: {', '.join(missing_fields)}")
    
    change = resource.get("change", {})
    if isinstance(change, dict):
        if "actions" not in change:
            warnings.append("Resource change missing 'actions' field")
        elif not isinstance(change.get("actions"), list):
            warnings.append("Resource change 'actions' must be a list")
        for snapshot in ("before", "after"):
            value = change.get(snapshot)
            if value is not None and not isinstance(value, dict):
                warnings.append(f"Resource change '{snapshot}' must be an object or null")
    elif change is not None:
        warnings.append("Resource change 'change' must be an object")
    
    return warnings


def get_plan_summary(plan_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract summary information from plan.
    
    Args:
        plan_data: Parsed Terraform plan JSON
        
    Returns:
        Dictionary with plan summary information
    """
    resource_changes = plan_data.get("resource_changes") or []
    
    return {
        "format_version": plan_data.get("format_version", "unknown"),
        "terraform_version": plan_data.get("terraform_version", "unknown"),
        "resource_count": len(resource_changes),
    }
