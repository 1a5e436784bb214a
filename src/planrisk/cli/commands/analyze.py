"""Analyze command - run risk and cost assessment on a Terraform plan."""

import json
import sys
from pathlib import Path
import click
from ...analysis.aggregator import filter_resources
from ...contracts.analysis_output import RiskLevel, risk_level_at_least
from ...ingest.models import ActionType
from ...utils.errors import PlanRiskError
from ...utils.logging import get_logger, set_verbosity
from ..utils import run_analysis, format_error

logger = get_logger("cli.analyze")

LEVEL_CHOICES = [level.value for level in RiskLevel]
ACTION_CHOICES = [action.value for action in ActionType]

# Exit code when --fail-on threshold is reached
EXIT_RISK_THRESHOLD = 2


@click.command()
@click.argument('plan_json', type=click.Path(exists=False, allow_dash=True))
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON instead of human-readable')
@click.option('--output', '-o', type=click.Path(), help='Save output to file')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Rule table override YAML')
@click.option('--search', help='Only list resources whose address or type contains this text')
@click.option('--action', type=click.Choice(ACTION_CHOICES), help='Only list resources with this action')
@click.option('--risk-level', type=click.Choice(LEVEL_CHOICES), help='Only list resources at this risk level')
@click.option('--fail-on', type=click.Choice(LEVEL_CHOICES), help=f'Exit {EXIT_RISK_THRESHOLD} if overall risk is at or above this level')
@click.option('--ascii', 'ascii_mode', is_flag=True, default=None, help='ASCII-only output')
def analyze(plan_json, json_output, output, quiet, config_path, search, action, risk_level, fail_on, ascii_mode):
    """
    Analyze a Terraform plan and show its risk and cost assessment.
    
    PLAN_JSON is the output of `terraform show -json plan.tfplan`, or - for stdin.
    Resource filters apply to the human-readable listing only.
    """
    set_verbosity(quiet=quiet)
    try:
        if not quiet:
            click.echo(f"Analyzing plan: {plan_json}", err=True)
        
        analysis = run_analysis(plan_json, config_path)
        
        if json_output:
            output_text = json.dumps(analysis.to_dict(), indent=2)
        else:
            from ...presentation.human_formatter import format_human_friendly
            shown = None
            if search or action or risk_level:
                shown = filter_resources(analysis.resources, search=search, action=action, risk_level=risk_level)
            output_text = format_human_friendly(analysis, ascii_mode=ascii_mode, resources=shown)
        
        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(output_text)
            if not quiet:
                click.echo(f"Output saved to: {output_path}", err=True)
        else:
            try:
                click.echo(output_text)
            except UnicodeEncodeError:
                safe_text = output_text.encode('ascii', errors='replace').decode('ascii')
                click.echo(safe_text)
        
    except PlanRiskError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Analysis failed: {e}"), err=True)
        sys.exit(1)
    
    if fail_on and risk_level_at_least(analysis.overall_risk_level, fail_on):
        click.echo(
            f"Overall risk {analysis.overall_risk_level} is at or above --fail-on {fail_on}",
            err=True,
        )
        sys.exit(EXIT_RISK_THRESHOLD)
