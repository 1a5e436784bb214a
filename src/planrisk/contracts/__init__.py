from .analysis_output import (
    AnalyzedResource,
    PlanAnalysis,
    RiskLevel,
    RISK_LEVEL_ORDER,
    risk_level_at_least,
)

__all__ = [
    "AnalyzedResource",
    "PlanAnalysis",
    "RiskLevel",
    "RISK_LEVEL_ORDER",
    "risk_level_at_least",
]
