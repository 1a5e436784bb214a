"""Inputs and running state shared by the risk rules."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from ..config.models import RuleTables
from ..ingest.models import ActionType, ResourceChange


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at for one resource. Read-only."""
    resource: ResourceChange
    action: ActionType
    is_stateful: bool
    is_production: bool
    changed_attributes: Tuple[str, ...]
    cost_before: float
    cost_after: float
    tables: RuleTables

    @property
    def resource_type(self) -> str:
        return self.resource.type

    @property
    def before(self) -> Optional[Dict[str, Any]]:
        return self.resource.change.before

    @property
    def after(self) -> Optional[Dict[str, Any]]:
        return self.resource.change.after

    @property
    def is_destructive(self) -> bool:
        return self.action in (ActionType.DELETE, ActionType.REPLACE)


@dataclass
class RiskAccumulator:
    """Running score, reasons and flags. Rules only ever add."""
    score: int = 0
    reasons: List[str] = field(default_factory=list)
    has_lifecycle_issues: bool = False

    def add(self, points: int, reason: Optional[str] = None) -> None:
        self.score += points
        if reason:
            self.reasons.append(reason)
