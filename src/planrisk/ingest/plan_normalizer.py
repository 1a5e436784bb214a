"""Convert validated plan JSON into typed ResourceChange records."""

from typing import Dict, Any, List, Optional
from pydantic import ValidationError
from .models import Change, ResourceChange, TerraformPlan
from .plan_validator import validate_resource_change
from ..utils.errors import PlanLoadError
from ..utils.logging import get_logger

logger = get_logger("ingest.plan_normalizer")


def _parse_resource_type(address: str) -> str:
    """Extract resource type from Terraform address (module.vpc.aws_vpc.main -> aws_vpc)."""
    parts = address.split(".")
    skip_next = False
    for part in parts:
        if skip_next:
            skip_next = False
            continue
        if part in ("module", "data"):
            skip_next = part == "module"
            continue
        if "_" in part:
            return part
    return ""


def _snapshot(value: Any) -> Optional[Dict[str, Any]]:
    """Keep an attribute snapshot only if it is an object; anything else counts as absent."""
    return value if isinstance(value, dict) else None


def _normalize_change(change: Any) -> Change:
    if not isinstance(change, dict):
        return Change()
    actions = change.get("actions")
    if not isinstance(actions, list):
        actions = []
    return Change(
        actions=[a for a in actions if isinstance(a, str)],
        before=_snapshot(change.get("before")),
        after=_snapshot(change.get("after")),
        after_unknown=_snapshot(change.get("after_unknown")),
        before_sensitive=change.get("before_sensitive"),
        after_sensitive=change.get("after_sensitive"),
    )


def normalize_resource_change(resource_change: Dict[str, Any]) -> ResourceChange:
    """
    Build a ResourceChange from one raw resource_changes entry.
    
    Missing or mistyped optional parts degrade to empty values rather than
    failing: a non-object snapshot becomes None, a missing action list
    becomes [], a missing type is read from the address.
    """
    address = resource_change.get("address")
    resource_type = resource_change.get("type")
    if not isinstance(resource_type, str) or not resource_type:
        resource_type = _parse_resource_type(address)
    name = resource_change.get("name")
    provider_name = resource_change.get("provider_name")
    
    return ResourceChange(
        address=address,
        type=resource_type,
        name=name if isinstance(name, str) else None,
        provider_name=provider_name if isinstance(provider_name, str) else None,
        change=_normalize_change(resource_change.get("change")),
    )


def normalize_plan(plan_data: Dict[str, Any]) -> TerraformPlan:
    """
    Normalize validated Terraform plan JSON into a TerraformPlan.
    
    Entries that are not objects or have no address are skipped with a
    warning; everything else is kept in plan order.
    
    Args:
        plan_data: Plan JSON that passed validate_plan_structure
        
    Returns:
        TerraformPlan with typed resource changes
        
    Raises:
        PlanLoadError: If the plan itself cannot be represented
    """
    resource_changes: List[ResourceChange] = []
    
    for index, raw in enumerate(plan_data.get("resource_changes") or []):
        problems = validate_resource_change(raw)
        if problems:
            logger.debug(f"resource_changes[{index}]: {'; '.join(problems)}")
        
        if not isinstance(raw, dict):
            logger.warning(f"Skipping resource_changes[{index}]: not an object")
            continue
        address = raw.get("address")
        if not isinstance(address, str) or not address:
            logger.warning(f"Skipping resource_changes[{index}]: no address")
            continue
        
        resource_changes.append(normalize_resource_change(raw))
    
    format_version = plan_data.get("format_version")
    terraform_version = plan_data.get("terraform_version")
    try:
        plan = TerraformPlan(
            format_version=format_version if isinstance(format_version, str) else None,
            terraform_version=terraform_version if isinstance(terraform_version, str) else None,
            resource_changes=resource_changes,
        )
    except ValidationError as e:
        raise PlanLoadError(f"Invalid Terraform plan: {e}")
    
    logger.info(f"Normalized {len(resource_changes)} resource changes from plan")
    return plan
