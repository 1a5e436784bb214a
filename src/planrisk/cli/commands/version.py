"""Version command - show planrisk version."""

import click
from ... import __version__


@click.command()
def version():
    """Show planrisk version."""
    click.echo(f"planrisk version {__version__}")
