"""Short paragraph summary of a plan analysis (deterministic)."""

from ..contracts.analysis_output import PlanAnalysis
from .human_formatter import format_money


def generate_summary(analysis: PlanAnalysis) -> str:
    """
    Generate short paragraph summary (2-4 sentences, deterministic).
    
    Args:
        analysis: PlanAnalysis from analyze_plan
        
    Returns:
        Short paragraph summary
    """
    if analysis.total_resources == 0:
        return "This plan has no resource changes."
    
    sentences = []
    
    changes = [
        (analysis.creates, "create"),
        (analysis.updates, "update"),
        (analysis.deletes, "delete"),
        (analysis.replaces, "replace"),
    ]
    change_text = ", ".join(f"{count} {label}" for count, label in changes if count)
    sentence = f"This plan touches {analysis.total_resources} resource{'s' if analysis.total_resources != 1 else ''}"
    if change_text:
        sentence += f" ({change_text})"
    sentences.append(sentence + f" and has {analysis.overall_risk_level} overall risk "
                                f"(score {analysis.overall_risk_score:.1f}/100).")
    
    if analysis.high_risk_resources:
        top = analysis.high_risk_resources[0]
        reason = top.risk_reasons[0] if top.risk_reasons else "elevated risk"
        sentences.append(
            f"{len(analysis.high_risk_resources)} resource{'s are' if len(analysis.high_risk_resources) != 1 else ' is'} "
            f"high risk or worse; the riskiest is {top.address} ({reason})."
        )
    
    if analysis.cost_available:
        sentences.append(
            f"Estimated monthly cost changes by {format_money(analysis.cost_delta, signed=True)} "
            f"({analysis.cost_percent_change:+.1f}%)."
        )
    
    return " ".join(sentences)
