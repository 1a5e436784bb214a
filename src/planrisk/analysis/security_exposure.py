"""Rules for security exposure: IAM permission escalation and public security group ingress."""

from typing import Any, Dict, List, Optional
from ..config.models import RuleTables
from ..utils.logging import get_logger
from .rule_context import RuleContext, RiskAccumulator

logger = get_logger("analysis.security_exposure")


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def has_iam_escalation(before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]], tables: RuleTables) -> bool:
    """
    True if after attaches a managed policy not in before whose ARN contains
    an elevated-privilege marker (FullAccess, AdministratorAccess, ...).
    Needs both snapshots: creations and deletions never count.
    """
    if before is None or after is None:
        return False
    
    attribute = tables.iam.policy_attribute
    before_policies = set(_string_list(before.get(attribute)))
    for policy in _string_list(after.get(attribute)):
        if policy in before_policies:
            continue
        if any(marker in policy for marker in tables.iam.elevated_markers):
            return True
    return False


def _is_sensitive_port(port: Any, tables: RuleTables) -> bool:
    if isinstance(port, bool) or not isinstance(port, (int, float)):
        return False
    return port in tables.security_group.sensitive_ports


def has_public_sensitive_ingress(after: Optional[Dict[str, Any]], tables: RuleTables) -> bool:
    """True if any ingress rule in after opens a sensitive from_port to the public CIDR."""
    if after is None:
        return False
    
    ingress = after.get("ingress")
    if not isinstance(ingress, list):
        return False
    
    public_cidr = tables.security_group.public_cidr
    for rule in ingress:
        if not isinstance(rule, dict):
            continue
        if public_cidr in _string_list(rule.get("cidr_blocks")) and _is_sensitive_port(rule.get("from_port"), tables):
            return True
    return False


def iam_escalation_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    if ctx.resource_type not in ctx.tables.iam.types:
        return
    if has_iam_escalation(ctx.before, ctx.after, ctx.tables):
        acc.add(ctx.tables.scores.iam_escalation, "IAM policy change widens permissions")
        logger.debug(f"IAM escalation detected: {ctx.resource.address}")


def security_group_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    if ctx.resource_type != ctx.tables.security_group.type:
        return
    if has_public_sensitive_ingress(ctx.after, ctx.tables):
        acc.add(ctx.tables.scores.security_group_widening, "Security group opens sensitive ports to public internet")
        logger.debug(f"Public sensitive ingress detected: {ctx.resource.address}")
