"""planrisk - Deterministic risk and cost assessment for Terraform plans."""

from typing import Dict, Any, Optional
from .ingest.plan_loader import load_plan_json, parse_plan_text
from .ingest.plan_normalizer import normalize_plan
from .analysis.aggregator import analyze_plan
from .contracts.analysis_output import PlanAnalysis, AnalyzedResource, RiskLevel
from .config import load_rule_tables
from .utils.logging import setup_logging, get_logger
from .utils.errors import PlanRiskError, AnalysisError

__version__ = "0.1.0"

__all__ = ["analyze", "analyze_file", "analyze_text", "analyze_plan", "PlanAnalysis", "AnalyzedResource", "RiskLevel"]

setup_logging()
logger = get_logger("planrisk")


def _run(plan_data: Dict[str, Any], config_path: Optional[str]) -> PlanAnalysis:
    try:
        tables = load_rule_tables(config_path)
        plan = normalize_plan(plan_data)
        if not plan.resource_changes:
            logger.warning("No resource changes found in plan")
        return analyze_plan(plan, tables)
    except PlanRiskError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during analysis: {e}", exc_info=True)
        raise AnalysisError(f"Analysis failed: {e}") from e


def analyze_file(plan_json_path: str, config_path: Optional[str] = None) -> PlanAnalysis:
    """Analyze a Terraform plan JSON file."""
    logger.info(f"Starting analysis of plan: {plan_json_path}")
    plan_data = load_plan_json(plan_json_path)
    return _run(plan_data, config_path)


def analyze(plan_json_path: str, config_path: Optional[str] = None) -> Dict[str, Any]:
    """Analyze a Terraform plan JSON file and return the assessment as a camelCase dict."""
    return analyze_file(plan_json_path, config_path).to_dict()


def analyze_text(plan_text: str, config_path: Optional[str] = None) -> PlanAnalysis:
    """Analyze Terraform plan JSON text (stdin, pasted plan)."""
    plan_data = parse_plan_text(plan_text)
    return _run(plan_data, config_path)
