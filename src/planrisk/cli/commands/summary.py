"""Summary command - generate short paragraph summary."""

import json
import sys
import click
from ...presentation.summary import generate_summary
from ...utils.errors import PlanRiskError
from ...utils.logging import get_logger, set_verbosity
from ..utils import run_analysis, format_error, load_analysis_json

logger = get_logger("cli.summary")


@click.command()
@click.argument('plan_json', type=click.Path(exists=False, allow_dash=True), required=False)
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), help='Rule table override YAML')
@click.option('--from-json', type=click.Path(exists=True), help='Reuse analysis from JSON file instead of running analysis')
def summary(plan_json, json_output, quiet, config_path, from_json):
    """Generate short paragraph summary of risk assessment."""
    set_verbosity(quiet=quiet)
    try:
        if from_json:
            analysis = load_analysis_json(from_json)
            if not quiet:
                click.echo(f"Loaded analysis from: {from_json}", err=True)
        elif plan_json:
            if not quiet:
                click.echo(f"Analyzing plan: {plan_json}", err=True)
            analysis = run_analysis(plan_json, config_path)
        else:
            raise click.UsageError("Provide PLAN_JSON or --from-json")
        
        summary_text = generate_summary(analysis)
        
        if json_output:
            output_data = {
                "summary": summary_text,
                "overallRiskLevel": analysis.overall_risk_level,
                "overallRiskScore": analysis.overall_risk_score,
                "criticalIssues": analysis.critical_issues,
                "warnings": analysis.warnings,
            }
            click.echo(json.dumps(output_data, indent=2))
        else:
            try:
                click.echo(summary_text)
            except UnicodeEncodeError:
                safe_text = summary_text.encode('ascii', errors='replace').decode('ascii')
                click.echo(safe_text)
        
    except PlanRiskError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
