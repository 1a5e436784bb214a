"""Plan-level aggregation: analyze every resource change and summarize the plan."""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
from ..config import default_rule_tables
from ..config.models import RuleTables
from ..contracts.analysis_output import AnalyzedResource, PlanAnalysis, RiskLevel
from ..ingest.models import ActionType, ResourceChange, TerraformPlan
from ..ingest.plan_normalizer import normalize_plan
from ..utils.logging import get_logger
from .classifier import classify_action, diff_attributes
from .cost_estimator import estimate_cost
from .risk_rules import cost_percent_change, is_production, level_for_score, score_resource
from .state_destructive import is_stateful

logger = get_logger("analysis.aggregator")

PlanInput = Union[TerraformPlan, Dict[str, Any], Sequence[ResourceChange]]


def analyze_resource(resource: ResourceChange, tables: Optional[RuleTables] = None) -> AnalyzedResource:
    """Classify, price and score a single resource change."""
    tables = tables or default_rule_tables()
    change = resource.change
    
    action = classify_action(change.actions)
    stateful = is_stateful(resource.type, tables)
    production = is_production(change.before, change.after, tables)
    changed = diff_attributes(change.before, change.after)
    
    cost_before = estimate_cost(resource.type, change.before, tables)
    cost_after = estimate_cost(resource.type, change.after, tables)
    
    assessment = score_resource(
        resource,
        action,
        is_stateful=stateful,
        is_production=production,
        changed_attributes=changed,
        cost_before=cost_before,
        cost_after=cost_after,
        tables=tables,
    )
    
    return AnalyzedResource(
        address=resource.address,
        type=resource.type,
        action=action,
        actions=list(change.actions),
        risk_level=assessment.level,
        risk_score=assessment.score,
        risk_reasons=list(assessment.reasons),
        cost_before=cost_before,
        cost_after=cost_after,
        cost_delta=cost_after - cost_before,
        before=change.before,
        after=change.after,
        changed_attributes=changed,
        is_stateful=stateful,
        has_lifecycle_issues=assessment.has_lifecycle_issues,
        is_production=production,
    )


def _resource_changes(plan: PlanInput) -> List[ResourceChange]:
    if isinstance(plan, TerraformPlan):
        return list(plan.resource_changes)
    if isinstance(plan, dict):
        # Callers validate first; here an absent list just means nothing to analyze
        return list(normalize_plan(plan).resource_changes)
    return list(plan or [])


def _weight(level: str, tables: RuleTables) -> int:
    weights = tables.risk_levels.weights
    if level == RiskLevel.CRITICAL:
        return weights.critical
    if level == RiskLevel.HIGH:
        return weights.high
    return weights.default


def weighted_risk_score(resources: Sequence[AnalyzedResource], tables: RuleTables) -> float:
    """Weighted average of resource scores (critical x3, high x2, others x1), clamped to [0, 100]."""
    if not resources:
        return 0.0
    total = sum(r.risk_score * _weight(r.risk_level, tables) for r in resources)
    weight_sum = sum(_weight(r.risk_level, tables) for r in resources)
    return min(max(total / weight_sum, 0.0), 100.0)


def overall_risk_level(max_score: float, average: float, tables: RuleTables) -> RiskLevel:
    """Plan level is the higher of what the worst resource and the weighted average indicate."""
    by_max = level_for_score(max_score, tables.risk_levels.overall_max)
    by_average = level_for_score(average, tables.risk_levels.overall_average)
    levels = list(RiskLevel)
    return max(by_max, by_average, key=levels.index)


def _issue_line(resource: AnalyzedResource, fallback: str) -> str:
    reason = resource.risk_reasons[0] if resource.risk_reasons else fallback
    return f"{resource.address} ({resource.action}) — {reason}"


def analyze_plan(plan: PlanInput, tables: Optional[RuleTables] = None) -> PlanAnalysis:
    """
    Analyze every resource change in a plan and aggregate the results.
    
    Args:
        plan: TerraformPlan, plan JSON dict, or a sequence of ResourceChange
        tables: Rule tables (packaged defaults if None)
        
    Returns:
        PlanAnalysis with resources ordered by descending risk score
    """
    tables = tables or default_rule_tables()
    analyzed = [analyze_resource(rc, tables) for rc in _resource_changes(plan)]
    
    # sorted() is stable: equal scores keep plan order
    resources = sorted(analyzed, key=lambda r: -r.risk_score)
    
    counts = {action: 0 for action in ActionType}
    for r in resources:
        counts[ActionType(r.action)] += 1
    
    total_cost_before = sum(r.cost_before for r in resources)
    total_cost_after = sum(r.cost_after for r in resources)
    
    prefix = tables.priced_provider_prefix
    cost_available = any(
        r.type.startswith(prefix) and (r.cost_before > 0 or r.cost_after > 0)
        for r in resources
    )
    
    average = weighted_risk_score(resources, tables)
    max_score = max((r.risk_score for r in resources), default=0)
    level = overall_risk_level(max_score, average, tables)
    
    high_risk = [r for r in resources if r.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH)]
    critical_issues = [_issue_line(r, "High risk operation") for r in resources if r.risk_level == RiskLevel.CRITICAL]
    warnings = [_issue_line(r, "Elevated risk") for r in resources if r.risk_level == RiskLevel.HIGH]
    
    analysis = PlanAnalysis(
        total_resources=len(resources),
        creates=counts[ActionType.CREATE],
        updates=counts[ActionType.UPDATE],
        deletes=counts[ActionType.DELETE],
        replaces=counts[ActionType.REPLACE],
        noops=counts[ActionType.NO_OP],
        reads=counts[ActionType.READ],
        overall_risk_score=average,
        overall_risk_level=level,
        total_cost_before=total_cost_before,
        total_cost_after=total_cost_after,
        cost_delta=total_cost_after - total_cost_before,
        cost_percent_change=cost_percent_change(total_cost_before, total_cost_after),
        cost_available=cost_available,
        resources=resources,
        high_risk_resources=high_risk,
        warnings=warnings,
        critical_issues=critical_issues,
    )
    
    logger.info(
        f"Analyzed {len(resources)} resources: {level.value} risk "
        f"(score: {average:.1f}, max: {max_score})"
    )
    return analysis


def filter_resources(
    resources: Iterable[AnalyzedResource],
    search: Optional[str] = None,
    action: Optional[str] = None,
    risk_level: Optional[str] = None,
) -> List[AnalyzedResource]:
    """
    Narrow an analyzed resource list, keeping its order.
    
    Args:
        resources: Analyzed resources
        search: Case-insensitive substring of address or type
        action: Exact categorical action (create, update, ...)
        risk_level: Exact risk level (critical, high, ...)
    """
    needle = search.lower() if search else None
    selected = []
    for r in resources:
        if needle and needle not in r.address.lower() and needle not in r.type.lower():
            continue
        if action and r.action != action:
            continue
        if risk_level and r.risk_level != risk_level:
            continue
        selected.append(r)
    return selected
