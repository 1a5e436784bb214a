"""Estimate monthly cost of a resource from its attribute snapshot."""

import math
from typing import Any, Dict, Optional
from ..config import default_rule_tables
from ..config.models import RuleTables, StorageRate
from ..utils.logging import get_logger

logger = get_logger("analysis.cost_estimator")


def _as_text(value: Any) -> str:
    """Render an attribute value the way it appears in plan JSON, for price matching."""
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_size(value: Any) -> float:
    """Numeric size in GB; anything missing, non-numeric or negative counts as 0."""
    try:
        size = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(size) or math.isinf(size) or size < 0:
        return 0.0
    return size


def _storage_cost(rate: StorageRate, attributes: Dict[str, Any]) -> float:
    source: Any = attributes
    if rate.block:
        source = attributes.get(rate.block)
        # plan JSON renders nested blocks as a single-element list
        if isinstance(source, list):
            source = source[0] if source else None
    if not isinstance(source, dict):
        return 0.0
    return _as_size(source.get(rate.attribute)) * rate.price_per_gb


def estimate_cost(resource_type: str, attributes: Optional[Dict[str, Any]], tables: Optional[RuleTables] = None) -> float:
    """
    Estimate monthly cost in USD for one attribute snapshot.
    
    Sums every matching price entry (flat base charges always match,
    attribute-match entries match when the attribute renders equal to the
    expected value) plus the size-proportional storage charge for types that
    have one. Never raises.
    
    Args:
        resource_type: Terraform resource type
        attributes: before or after snapshot (None if absent)
        tables: Rule tables (defaults if None)
        
    Returns:
        Non-negative estimate; 0 for absent snapshots and unpriced types
    """
    if attributes is None:
        return 0.0
    
    tables = tables or default_rule_tables()
    prices = tables.pricing.get(resource_type)
    if not prices:
        return 0.0
    
    total = 0.0
    for price in prices:
        if price.is_base:
            total += price.price_per_unit
        elif price.attribute is not None:
            if _as_text(attributes.get(price.type)) == price.attribute:
                total += price.price_per_unit
    
    rate = tables.storage_rates.get(resource_type)
    if rate is not None:
        total += _storage_cost(rate, attributes)
    
    return total
