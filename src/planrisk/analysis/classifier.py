"""Classify raw Terraform action verbs and diff attribute snapshots."""

import json
from typing import Any, Dict, Iterable, List, Optional
from ..ingest.models import ActionType

_MISSING = object()


def classify_action(actions: Iterable[str]) -> ActionType:
    """
    Map a set of raw action verbs to a single ActionType.
    
    Precedence (first match wins): delete+create -> replace, create -> create,
    delete -> delete, update -> update, read -> read, otherwise no-op.
    Only membership matters; order and duplicates do not.
    """
    present = set(actions or ())
    
    if "delete" in present and "create" in present:
        return ActionType.REPLACE
    if "create" in present:
        return ActionType.CREATE
    if "delete" in present:
        return ActionType.DELETE
    if "update" in present:
        return ActionType.UPDATE
    if "read" in present:
        return ActionType.READ
    return ActionType.NO_OP


def _whole_numbers(value: Any) -> Any:
    """1.0 and 1 render the same in plan JSON."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _whole_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_whole_numbers(v) for v in value]
    return value


def _canonical(value: Any) -> str:
    """Serialize a JSON-like value with stable key order. Absent and null stay distinct."""
    if value is _MISSING:
        return "<absent>"
    try:
        return json.dumps(_whole_numbers(value), sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(value)


def diff_attributes(before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]]) -> List[str]:
    """
    Names of attributes whose value differs between two snapshots.
    
    Keys are taken from the union of both snapshots in first-seen order
    (before's keys, then keys only in after).
    """
    before = before or {}
    after = after or {}
    
    changed = []
    for key in list(dict.fromkeys([*before.keys(), *after.keys()])):
        if _canonical(before.get(key, _MISSING)) != _canonical(after.get(key, _MISSING)):
            changed.append(key)
    return changed
