"""Human-friendly output formatter - converts PlanAnalysis to readable text."""

import os
from typing import List, Optional, Sequence
from ..contracts.analysis_output import AnalyzedResource, PlanAnalysis


def _use_ascii(ascii_mode: Optional[bool] = None) -> bool:
    """Resolve whether to use ASCII output (checked at format time)."""
    if ascii_mode is not None:
        return bool(ascii_mode)
    return os.environ.get("PLANRISK_ASCII", "").lower() in ("1", "true", "yes")


def _box(title: str, width: int = 65, ascii_mode: bool = False) -> List[str]:
    """Return box-drawing header lines."""
    b = {"tl": "+", "tr": "+", "h": "-", "v": "|"} if ascii_mode else {"tl": "┌", "tr": "┐", "h": "─", "v": "│"}
    h = b["h"] * (width - 2)
    return [
        b["tl"] + h + b["tr"],
        f"{b['v']} {title:<{width - 4}} {b['v']}",
        ("+" if ascii_mode else "└") + h + ("+" if ascii_mode else "┘"),
        "",
    ]


def _alert_banner(level: str, message: str, width: int = 65, ascii_mode: bool = False) -> List[str]:
    """Return double-line alert banner."""
    emoji_map = {
        "critical": "[!] " if ascii_mode else "⚠️ ",
        "high": "[!] " if ascii_mode else "⚠️  ",
        "medium": "[i] " if ascii_mode else "ℹ️  ",
        "low": "[i] " if ascii_mode else "ℹ️  ",
        "safe": "[OK] " if ascii_mode else "✅ ",
    }
    text = f"{emoji_map.get(level, '')}{message}"
    if ascii_mode:
        h = "=" * (width - 2)
        return ["+" + h + "+", f"| {text:<{width - 4}} |", "+" + h + "+", ""]
    return [
        "╔" + "═" * (width - 2) + "╗",
        f"║ {text:<{width - 4}} ║",
        "╚" + "═" * (width - 2) + "╝",
        "",
    ]


def _section(title: str, width: int = 65) -> List[str]:
    """Return section divider."""
    h = "-" * width
    return [h, title.center(width), h]


def _get_banner_message(level: str) -> str:
    messages = {
        "critical": "CRITICAL RISK - DO NOT APPLY WITHOUT REVIEW",
        "high": "HIGH RISK - CAREFUL REVIEW REQUIRED",
        "medium": "MEDIUM RISK - PEER REVIEW RECOMMENDED",
        "low": "LOW RISK - ROUTINE CHANGES",
        "safe": "SAFE - NO RISKY CHANGES DETECTED",
    }
    return messages.get(level, f"{level.upper()} RISK")


def format_money(amount: float, signed: bool = False) -> str:
    """$1,234.56 (with explicit +/- sign when signed)."""
    sign = ""
    if signed:
        sign = "+" if amount > 0 else "-" if amount < 0 else ""
    elif amount < 0:
        sign = "-"
    return f"{sign}${abs(amount):,.2f}"


def _build_action_counts(analysis: PlanAnalysis) -> List[str]:
    return [
        f"Resources:  {analysis.total_resources} total",
        f"  create {analysis.creates}  update {analysis.updates}  delete {analysis.deletes}  "
        f"replace {analysis.replaces}  read {analysis.reads}  no-op {analysis.noops}",
    ]


def _build_cost_summary(analysis: PlanAnalysis) -> List[str]:
    if not analysis.cost_available:
        return ["Cost estimate not available for the resources in this plan."]
    return [
        f"Before:  {format_money(analysis.total_cost_before)} / month",
        f"After:   {format_money(analysis.total_cost_after)} / month",
        f"Delta:   {format_money(analysis.cost_delta, signed=True)} ({analysis.cost_percent_change:+.1f}%)",
        "Estimates come from a fixed price table and are advisory only.",
    ]


def _format_resource(resource: AnalyzedResource, ascii_mode: bool = False) -> List[str]:
    branch, last = ("|-", "\\-") if ascii_mode else ("├─", "└─")
    bullet = "*" if ascii_mode else "•"
    flags = [
        label for label, on in (
            ("stateful", resource.is_stateful),
            ("production", resource.is_production),
            ("lifecycle", resource.has_lifecycle_issues),
        ) if on
    ]
    header = f"  {bullet} {resource.address}  [{resource.risk_level.upper()} {resource.risk_score}]  {resource.action}"
    if flags:
        header += f"  ({', '.join(flags)})"
    lines = [header]
    
    details = [f"Reason: {reason}" for reason in resource.risk_reasons]
    if resource.cost_delta:
        details.append(f"Cost: {format_money(resource.cost_delta, signed=True)} / month")
    if resource.changed_attributes and resource.action in ("update", "replace"):
        details.append(f"Changed: {', '.join(resource.changed_attributes)}")
    for i, detail in enumerate(details):
        lines.append(f"    {last if i == len(details) - 1 else branch} {detail}")
    return lines


def format_human_friendly(
    analysis: PlanAnalysis,
    ascii_mode: Optional[bool] = None,
    resources: Optional[Sequence[AnalyzedResource]] = None,
) -> str:
    """
    Format PlanAnalysis as a human-friendly, box-drawn report.
    
    Args:
        analysis: Plan analysis
        ascii_mode: ASCII-only characters (default: PLANRISK_ASCII env var)
        resources: Subset of resources to list (default: all)
    """
    ascii_mode = _use_ascii(ascii_mode)
    W = 65
    bullet = "*" if ascii_mode else "•"
    level = analysis.overall_risk_level
    lines = []
    
    lines.extend(_box("Terraform Plan Risk Assessment", W, ascii_mode))
    lines.extend(_alert_banner(level, _get_banner_message(level), W, ascii_mode))
    lines.append(f"Overall Risk: {level.upper()} (score {analysis.overall_risk_score:.1f} / 100)")
    lines.extend(_build_action_counts(analysis))
    lines.append("")
    
    lines.extend(_section("COST IMPACT", W))
    lines.extend(_build_cost_summary(analysis))
    lines.append("")
    
    if analysis.critical_issues:
        lines.extend(_section("CRITICAL ISSUES", W))
        lines.extend(f"{bullet} {issue}" for issue in analysis.critical_issues)
        lines.append("")
    
    if analysis.warnings:
        lines.extend(_section("WARNINGS", W))
        lines.extend(f"{bullet} {warning}" for warning in analysis.warnings)
        lines.append("")
    
    shown = analysis.resources if resources is None else list(resources)
    title = "RESOURCES" if resources is None else f"RESOURCES ({len(shown)} of {analysis.total_resources})"
    lines.extend(_section(title, W))
    if not shown:
        lines.append("No resources to show.")
    for resource in shown:
        lines.extend(_format_resource(resource, ascii_mode))
    
    return "\n".join(lines)
