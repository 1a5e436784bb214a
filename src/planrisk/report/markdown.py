"""Markdown report generation from PlanAnalysis."""

from pathlib import Path
from typing import List
from ..contracts.analysis_output import PlanAnalysis
from ..presentation.human_formatter import format_money
from ..presentation.summary import generate_summary
from ..utils.errors import ReportError
from ..utils.logging import get_logger

logger = get_logger("report.markdown")


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def render_markdown(analysis: PlanAnalysis) -> str:
    """Render PlanAnalysis as a markdown document."""
    sections: List[str] = []
    
    sections.append("# Terraform Plan Risk Assessment")
    sections.append("")
    sections.append(generate_summary(analysis))
    sections.append("")
    
    # Summary
    sections.append("## Summary")
    sections.append("")
    sections.append(f"- **Overall Risk Level:** {analysis.overall_risk_level}")
    sections.append(f"- **Overall Risk Score:** {analysis.overall_risk_score:.1f}/100")
    sections.append(f"- **Resources:** {analysis.total_resources}")
    sections.append(
        f"- **Actions:** {analysis.creates} create, {analysis.updates} update, "
        f"{analysis.deletes} delete, {analysis.replaces} replace, "
        f"{analysis.reads} read, {analysis.noops} no-op"
    )
    sections.append("")
    
    # Cost
    sections.append("## Cost Impact")
    sections.append("")
    if analysis.cost_available:
        sections.append(f"- **Before:** {format_money(analysis.total_cost_before)}/month")
        sections.append(f"- **After:** {format_money(analysis.total_cost_after)}/month")
        sections.append(
            f"- **Delta:** {format_money(analysis.cost_delta, signed=True)} "
            f"({analysis.cost_percent_change:+.1f}%)"
        )
        sections.append("")
        sections.append("_Estimates come from a fixed price table and are advisory only._")
    else:
        sections.append("Cost estimate not available.")
    sections.append("")
    
    # Issues
    sections.append("## Critical Issues")
    sections.append("")
    if analysis.critical_issues:
        sections.extend(f"- {issue}" for issue in analysis.critical_issues)
    else:
        sections.append("None detected.")
    sections.append("")
    
    sections.append("## Warnings")
    sections.append("")
    if analysis.warnings:
        sections.extend(f"- {warning}" for warning in analysis.warnings)
    else:
        sections.append("None detected.")
    sections.append("")
    
    # Resource table
    sections.append("## Resources")
    sections.append("")
    if analysis.resources:
        sections.append("| Address | Action | Risk | Score | Cost Delta | Reasons |")
        sections.append("|---|---|---|---|---|---|")
        for r in analysis.resources:
            reasons = "<br>".join(_escape_cell(reason) for reason in r.risk_reasons) or "-"
            sections.append(
                f"| `{r.address}` | {r.action} | {r.risk_level} | {r.risk_score} | "
                f"{format_money(r.cost_delta, signed=True)} | {reasons} |"
            )
    else:
        sections.append("No resource changes.")
    sections.append("")
    
    return "\n".join(sections)


def generate_markdown(analysis: PlanAnalysis, output_path: Path) -> None:
    """
    Generate markdown report from PlanAnalysis.
    
    Args:
        analysis: PlanAnalysis from analysis
        output_path: Path to output markdown file
        
    Raises:
        ReportError: If file write fails
    """
    content = render_markdown(analysis)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise ReportError(f"Failed to write markdown report: {e}")
    
    logger.info(f"Generated markdown report: {output_path}")
