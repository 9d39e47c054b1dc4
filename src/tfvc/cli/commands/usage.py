"""tfvc usage -- list every command and its accepted forms."""

from __future__ import annotations

import click

from tfvc.cli.formatting import format_usage, get_console
from tfvc.cli.options import TfvcCommand


@click.command(cls=TfvcCommand)
def usage() -> None:
    """Show the accepted forms of every command."""
    from tfvc.commands import default_registry

    format_usage(list(default_registry), get_console())
