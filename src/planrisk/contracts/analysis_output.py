"""Pydantic models for the analysis output (versioned, stable, explicit)."""

from enum import Enum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from ..ingest.models import ActionType


class RiskLevel(str, Enum):
    """Risk level, ordered safe < low < medium < high < critical."""
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


RISK_LEVEL_ORDER = {
    RiskLevel.SAFE: 0,
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


def risk_level_at_least(level: str, threshold: str) -> bool:
    """True if level is at or above threshold."""
    return RISK_LEVEL_ORDER[RiskLevel(level)] >= RISK_LEVEL_ORDER[RiskLevel(threshold)]


class _OutputModel(BaseModel):
    class Config:
        """Pydantic config."""
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True
        extra = "forbid"
        frozen = True

    def to_dict(self) -> Dict[str, Any]:
        """Dump with camelCase field names."""
        return self.model_dump(by_alias=True)


class AnalyzedResource(_OutputModel):
    """Risk and cost assessment for a single resource change."""
    address: str = Field(..., description="Resource address")
    type: str = Field(..., description="Resource type")
    action: ActionType = Field(..., description="Categorical action")
    actions: List[str] = Field(default_factory=list, description="Raw action verbs from the plan")
    risk_level: RiskLevel = Field(..., description="Level derived from risk_score")
    risk_score: int = Field(..., ge=0, description="Sum of rule contributions")
    risk_reasons: List[str] = Field(default_factory=list, description="Reasons in rule evaluation order")
    cost_before: float = Field(0.0, ge=0, description="Estimated monthly cost before apply")
    cost_after: float = Field(0.0, ge=0, description="Estimated monthly cost after apply")
    cost_delta: float = Field(0.0, description="cost_after - cost_before")
    before: Optional[Dict[str, Any]] = Field(None, description="Attribute snapshot before apply")
    after: Optional[Dict[str, Any]] = Field(None, description="Attribute snapshot after apply")
    changed_attributes: List[str] = Field(default_factory=list, description="Attributes whose value differs")
    is_stateful: bool = False
    has_lifecycle_issues: bool = False
    is_production: bool = False


class PlanAnalysis(_OutputModel):
    """Plan-level assessment - one per analyzed plan."""
    version: str = Field(default="1.0.0", description="Output contract version")
    total_resources: int = Field(0, ge=0)
    creates: int = Field(0, ge=0)
    updates: int = Field(0, ge=0)
    deletes: int = Field(0, ge=0)
    replaces: int = Field(0, ge=0)
    noops: int = Field(0, ge=0)
    reads: int = Field(0, ge=0)
    overall_risk_score: float = Field(0.0, ge=0, le=100, description="Weighted average of resource scores")
    overall_risk_level: RiskLevel = Field(RiskLevel.SAFE, description="Level from max and weighted average")
    total_cost_before: float = Field(0.0, ge=0)
    total_cost_after: float = Field(0.0, ge=0)
    cost_delta: float = 0.0
    cost_percent_change: float = 0.0
    cost_available: bool = Field(False, description="True if at least one priced resource has a nonzero estimate")
    resources: List[AnalyzedResource] = Field(default_factory=list, description="All resources, highest risk first")
    high_risk_resources: List[AnalyzedResource] = Field(default_factory=list, description="High and critical resources, highest risk first")
    warnings: List[str] = Field(default_factory=list, description="One line per high-risk resource")
    critical_issues: List[str] = Field(default_factory=list, description="One line per critical resource")
