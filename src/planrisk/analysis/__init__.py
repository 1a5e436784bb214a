"""Analysis engine: classifier, cost estimator, risk rules and plan aggregation."""

from .aggregator import analyze_plan, analyze_resource, filter_resources
from .classifier import classify_action, diff_attributes
from .cost_estimator import estimate_cost
from .risk_rules import RiskAssessment, score_resource, risk_level_for_score, cost_percent_change

__all__ = [
    "analyze_plan",
    "analyze_resource",
    "filter_resources",
    "classify_action",
    "diff_attributes",
    "estimate_cost",
    "RiskAssessment",
    "score_resource",
    "risk_level_for_score",
    "cost_percent_change",
]
