"""Report command - generate reports from a saved analysis (read-only)."""

import sys
from pathlib import Path
import click
from ...report.github import format_github_comment, post_pr_comment
from ...report.markdown import generate_markdown
from ...utils.errors import PlanRiskError
from ...utils.logging import get_logger
from ..utils import format_error, load_analysis_json

logger = get_logger("cli.report")


@click.group()
def report():
    """Generate reports from planrisk analysis JSON (read-only)."""
    pass


@report.command()
@click.option('--analysis', '-i', 'analysis_path', required=True, type=click.Path(exists=True), help='Path to analysis JSON (from `planrisk analyze --json`)')
@click.option('--repo', required=True, help='GitHub repository (owner/repo)')
@click.option('--pr', required=True, type=int, help='Pull request number')
@click.option('--token', envvar='GITHUB_TOKEN', help='GitHub token (or use GITHUB_TOKEN env var)')
@click.option('--update', is_flag=True, help='Update existing comment if found')
def github(analysis_path, repo, pr, token, update):
    """Post planrisk analysis as GitHub PR comment."""
    if not token:
        click.echo(format_error(
            "GitHub token required.",
            "Set GITHUB_TOKEN environment variable or use --token option.",
        ), err=True)
        sys.exit(1)
    
    try:
        analysis = load_analysis_json(analysis_path)
        comment = format_github_comment(analysis)
        post_pr_comment(repo, pr, comment, token, update=update)
        click.echo(f"Posted planrisk comment to {repo}#{pr}", err=True)
    
    except PlanRiskError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Failed to post GitHub comment: {e}"), err=True)
        sys.exit(1)


@report.command()
@click.option('--analysis', '-i', 'analysis_path', required=True, type=click.Path(exists=True), help='Path to analysis JSON (from `planrisk analyze --json`)')
@click.option('--output', '-o', required=True, type=click.Path(), help='Output markdown file path')
def markdown(analysis_path, output):
    """Generate markdown report from analysis JSON."""
    try:
        analysis = load_analysis_json(analysis_path)
        output_path = Path(output)
        generate_markdown(analysis, output_path)
        click.echo(f"Generated markdown report: {output_path}", err=True)
    
    except PlanRiskError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        click.echo(format_error(f"Failed to generate markdown report: {e}"), err=True)
        sys.exit(1)
