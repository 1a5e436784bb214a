"""Main CLI entry point for planrisk."""

import click
from .commands.analyze import analyze
from .commands.demo import demo
from .commands.summary import summary
from .commands.report import report
from .commands.version import version as version_command
from .. import __version__
from ..utils.logging import get_logger

logger = get_logger("cli.main")


@click.group()
@click.version_option(version=__version__, prog_name="planrisk", message="%(prog)s version %(version)s")
def cli():
    """planrisk - Terraform plan risk and cost analysis."""
    pass


cli.add_command(analyze)
cli.add_command(summary)
cli.add_command(report)
cli.add_command(demo)
cli.add_command(version_command)


if __name__ == "__main__":
    cli()
