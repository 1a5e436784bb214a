"""Rules for data-loss risk: stateful deletions, bucket deletion hygiene, lifecycle advisories."""

from typing import Any
from ..config.models import RuleTables
from ..ingest.models import ActionType
from ..utils.logging import get_logger
from .rule_context import RuleContext, RiskAccumulator

logger = get_logger("analysis.state_destructive")

LIFECYCLE_ADVISORY = "Replace operation on stateful resource - consider create_before_destroy lifecycle"


def is_stateful(resource_type: str, tables: RuleTables) -> bool:
    """True if the resource type holds persistent data."""
    return resource_type in tables.stateful_types


def _versioning_enabled(versioning: Any) -> bool:
    """versioning may be a block object or a list of blocks (plan JSON renders blocks as lists)."""
    if isinstance(versioning, dict):
        return bool(versioning.get("enabled"))
    if isinstance(versioning, list):
        return any(isinstance(block, dict) and bool(block.get("enabled")) for block in versioning)
    return False


def stateful_destructive_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    """Deleting or replacing a stateful resource risks data loss."""
    if ctx.is_stateful and ctx.is_destructive:
        acc.add(
            ctx.tables.scores.stateful_destructive,
            f"Stateful resource {ActionType(ctx.action).value} - potential data loss",
        )


def bucket_deletion_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    """
    Storage bucket deletions: an explicit force_destroy=false means apply will
    fail on a non-empty bucket; versioning means old versions can be orphaned.
    Both checks are independent.
    """
    if ctx.resource_type != ctx.tables.storage_bucket_type or ctx.action != ActionType.DELETE:
        return
    before = ctx.before
    if before is None:
        return
    
    if before.get("force_destroy") is False:
        acc.add(ctx.tables.scores.bucket_without_force_destroy, "S3 bucket deletion without force_destroy=true")
    if _versioning_enabled(before.get("versioning")):
        acc.add(ctx.tables.scores.bucket_versioned, "Versioned bucket deletion may leave orphaned versions")


def lifecycle_rule(ctx: RuleContext, acc: RiskAccumulator) -> None:
    """Advisory only: replacing stateful resources should use create_before_destroy."""
    if ctx.action == ActionType.REPLACE and ctx.is_stateful:
        acc.has_lifecycle_issues = True
        acc.reasons.append(LIFECYCLE_ADVISORY)
        logger.debug(f"Lifecycle advisory for {ctx.resource.address}")
