"""Plan ingestion: load, validate and normalize Terraform plan JSON."""

from .models import ActionType, Change, ResourceChange, TerraformPlan
from .plan_loader import load_plan_json, parse_plan_text
from .plan_normalizer import normalize_plan
from .plan_validator import validate_plan_structure

__all__ = [
    "ActionType",
    "Change",
    "ResourceChange",
    "TerraformPlan",
    "load_plan_json",
    "parse_plan_text",
    "normalize_plan",
    "validate_plan_structure",
]
