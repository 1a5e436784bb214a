"""Rule-based risk scoring for a single resource change (deterministic)."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
from ..config.models import LevelThresholds, RuleTables
from ..contracts.analysis_output import RiskLevel
from ..ingest.models import ActionType, ResourceChange
from ..utils.logging import get_logger
from .rule_context import RuleContext, RiskAccumulator
from .security_exposure import iam_escalation_rule, security_group_rule
from .state_destructive import bucket_deletion_rule, lifecycle_rule, stateful_destructive_rule

logger = get_logger("analysis.risk_rules")

Rule = Callable[[RuleContext, RiskAccumulator], None]

ACTION_REASONS = {
    ActionType.DELETE: "Resource deletion",
    ActionType.REPLACE: "Resource replacement (destroy then create)",
}


@dataclass(frozen=True)
class RiskAssessment:
    """Result of running every rule over one resource."""
    score: int
    level: RiskLevel
    reasons: Tuple[str, ...]
    has_lifecycle_issues: bool


def cost_percent_change(cost_before: float, cost_after: float) -> float:
    """Percent change with zero guard: 100 when going from nothing to something, 0 when both are zero."""
    if cost_before > 0:
        return (cost_after - cost_before) / cost_before * 100
    if cost_after > 0:
        return 100.0
    return 0.0


def format_percent(value: float) -> str:
    """Round half away from zero to a whole number, e.g. 150.5 -> '151'."""
    return str(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def level_for_score(score: float, thresholds: LevelThresholds) -> RiskLevel:
    if score >= thresholds.critical:
        return RiskLevel.CRITICAL
    if score >= thresholds.high:
        return RiskLevel.HIGH
    if score >= thresholds.medium:
        return RiskLevel.MEDIUM
    if score >= thresholds.low:
        return RiskLevel.LOW
    return RiskLevel.SAFE


def risk_level_for_score(score: int, tables: RuleTables) -> RiskLevel:
    """Per-resource level: >=80 critical, >=60 high, >=40 medium, >=20 low, else safe (default tables)."""
    return level_for_score(score, tables.risk_levels.resource)


def is_production(before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]], tables: RuleTables) -> bool:
    """
    True if the resource is tagged as production.
    
    Tags come from before when it carries a tags object, else from after.
    Tag keys (env/environment) and values (production/prod) match
    case-insensitively.
    """
    tags = (before or {}).get("tags")
    if not isinstance(tags, dict):
        tags = (after or {}).get("tags")
    if not isinstance(tags, dict):
        return False
    
    rules = tables.production
    for key, value in tags.items():
        if not isinstance(key, str) or key.lower() not in rules.tag_keys:
            continue
        if isinstance(value, str) and value.lower() in rules.tag_values:
            return True
    return False


def base_action_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    acc.add(ctx.tables.scores.for_action(ctx.action), ACTION_REASONS.get(ctx.action))


def production_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    if ctx.is_production and ctx.is_destructive:
        acc.add(ctx.tables.scores.production_destructive, "Production resource modification")


def replacement_attributes_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    """Name the changed attributes that force a replacement. Informational, no points."""
    if ctx.action != ActionType.REPLACE:
        return
    forcing = ctx.tables.replacement_attributes.get(ctx.resource_type, ())
    hits = [attr for attr in ctx.changed_attributes if attr in forcing]
    if hits:
        acc.reasons.append(f"Attribute changes forcing replacement: {', '.join(hits)}")


def cost_spike_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    percent = cost_percent_change(ctx.cost_before, ctx.cost_after)
    if percent > ctx.tables.scores.cost_spike_percent:
        acc.add(ctx.tables.scores.cost_spike, f"Cost increase of {format_percent(percent)}%")


# Evaluation order is part of the contract: reasons appear in this order.
RULES: Tuple[Rule, ...] = (
    base_action_rule,
    stateful_destructive_rule,
    production_rule,
    replacement_attributes_rule,
    bucket_deletion_rule,
    iam_escalation_rule,
    security_group_rule,
    cost_spike_rule,
    lifecycle_rule,
)


def score_resource(
    resource: ResourceChange,
    action: ActionType,
    is_stateful: bool,
    is_production: bool,
    changed_attributes: Sequence[str],
    cost_before: float,
    cost_after: float,
    tables: RuleTables,
) -> RiskAssessment:
    """
    Run every rule in order over one resource and derive its level.
    
    Args:
        resource: The resource change being scored
        action: Categorical action from classify_action
        is_stateful: Whether the type holds persistent data
        is_production: Whether the resource is tagged as production
        changed_attributes: Output of diff_attributes
        cost_before: Estimate for the before snapshot
        cost_after: Estimate for the after snapshot
        tables: Rule tables
        
    Returns:
        RiskAssessment with score, level, reasons and lifecycle flag
    """
    ctx = RuleContext(
        resource=resource,
        action=ActionType(action),
        is_stateful=is_stateful,
        is_production=is_production,
        changed_attributes=tuple(changed_attributes),
        cost_before=cost_before,
        cost_after=cost_after,
        tables=tables,
    )
    acc = RiskAccumulator()
    for rule in RULES:
        rule(ctx, acc)
    
    level = risk_level_for_score(acc.score, tables)
    logger.debug(f"{resource.address}: {ctx.action.value} scored {acc.score} ({level.value})")
    return RiskAssessment(
        score=acc.score,
        level=level,
        reasons=tuple(acc.reasons),
        has_lifecycle_issues=acc.has_lifecycle_issues,
    )
