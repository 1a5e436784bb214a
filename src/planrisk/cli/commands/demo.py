"""Demo command - analyze the bundled sample plan."""

import json
import click
from ...analysis.aggregator import analyze_plan
from ...presentation.human_formatter import format_human_friendly
from ...samples import load_sample_plan, SAMPLE_PLAN_PATH
from ...utils.logging import set_verbosity


@click.command()
@click.option('--json', 'json_output', is_flag=True, help='Output structured JSON')
@click.option('--show-plan', is_flag=True, help='Print the sample plan JSON instead of analyzing it')
def demo(json_output, show_plan):
    """Analyze a bundled sample plan (no plan file needed)."""
    set_verbosity()
    if show_plan:
        click.echo(SAMPLE_PLAN_PATH.read_text(encoding='utf-8'))
        return
    
    analysis = analyze_plan(load_sample_plan())
    if json_output:
        click.echo(json.dumps(analysis.to_dict(), indent=2))
    else:
        click.echo(format_human_friendly(analysis))
