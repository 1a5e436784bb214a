"""Pydantic models for the rule tables (pricing, stateful types, rule weights, thresholds)."""

from types import MappingProxyType
from typing import Dict, FrozenSet, Optional, Tuple
from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt, field_validator, model_validator
from ..ingest.models import ActionType


class _Frozen(BaseModel):
    class Config:
        frozen = True
        extra = "forbid"


class PriceEntry(_Frozen):
    """One row of the price table: a flat base charge or an attribute-match charge."""
    type: str = Field(..., description="'base' for a flat charge, otherwise the attribute key to match")
    attribute: Optional[str] = Field(None, description="Expected attribute value (as text) for attribute-match entries")
    price_per_unit: float = Field(..., ge=0, description="Monthly price in USD")
    unit: str = Field("month", description="Pricing unit, informational only")

    @field_validator("attribute", mode="before")
    @classmethod
    def _attribute_as_text(cls, value):
        # YAML reads memory_size: 128 as an int
        return None if value is None else str(value)

    @property
    def is_base(self) -> bool:
        return self.type == "base"


class StorageRate(_Frozen):
    """Size-proportional charge read from an attribute (optionally inside a nested block)."""
    attribute: str
    block: Optional[str] = None
    price_per_gb: float = Field(..., ge=0)


class IamRules(_Frozen):
    types: FrozenSet[str]
    policy_attribute: str = "managed_policy_arns"
    elevated_markers: Tuple[str, ...]


class SecurityGroupRules(_Frozen):
    type: str
    public_cidr: str = "0.0.0.0/0"
    sensitive_ports: FrozenSet[int]


class ProductionRules(_Frozen):
    tag_keys: FrozenSet[str]
    tag_values: FrozenSet[str]

    @field_validator("tag_keys", "tag_values", mode="after")
    @classmethod
    def _lowercase(cls, value):
        return frozenset(v.lower() for v in value)


class ScoreWeights(_Frozen):
    """Points added by each rule."""
    actions: Dict[ActionType, NonNegativeInt]
    stateful_destructive: NonNegativeInt
    production_destructive: NonNegativeInt
    bucket_without_force_destroy: NonNegativeInt
    bucket_versioned: NonNegativeInt
    iam_escalation: NonNegativeInt
    security_group_widening: NonNegativeInt
    cost_spike: NonNegativeInt
    cost_spike_percent: float

    @field_validator("actions", mode="after")
    @classmethod
    def _every_action_scored(cls, value):
        missing = [a.value for a in ActionType if a not in value]
        if missing:
            raise ValueError(f"scores.actions missing: {missing}")
        return MappingProxyType(dict(value))

    def for_action(self, action) -> int:
        return self.actions[ActionType(action)]


class LevelThresholds(_Frozen):
    """Minimum score for each level, compared with >= from critical down."""
    critical: float
    high: float
    medium: float
    low: float

    @model_validator(mode="after")
    def _descending(self):
        if not (self.critical >= self.high >= self.medium >= self.low):
            raise ValueError("thresholds must satisfy critical >= high >= medium >= low")
        return self


class LevelWeights(_Frozen):
    critical: PositiveInt = 3
    high: PositiveInt = 2
    default: PositiveInt = 1


class RiskLevelTables(_Frozen):
    resource: LevelThresholds
    overall_max: LevelThresholds
    overall_average: LevelThresholds
    weights: LevelWeights = Field(default_factory=LevelWeights)


class RuleTables(_Frozen):
    """All fixed lookup tables the analysis engine reads. Immutable once loaded."""
    priced_provider_prefix: str = "aws_"
    pricing: Dict[str, Tuple[PriceEntry, ...]] = Field(default_factory=dict, validate_default=True)
    storage_rates: Dict[str, StorageRate] = Field(default_factory=dict, validate_default=True)
    stateful_types: FrozenSet[str] = Field(default_factory=frozenset)
    replacement_attributes: Dict[str, Tuple[str, ...]] = Field(default_factory=dict, validate_default=True)
    storage_bucket_type: str = "aws_s3_bucket"
    iam: IamRules
    security_group: SecurityGroupRules
    production: ProductionRules
    scores: ScoreWeights
    risk_levels: RiskLevelTables

    @field_validator("pricing", "storage_rates", "replacement_attributes", mode="after")
    @classmethod
    def _read_only(cls, value):
        return MappingProxyType(dict(value))
