"""Rich formatting helpers for the tfvc CLI.

Renders CommandOutcomes for terminal display. Rich auto-detects TTY and
degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tfvc.models.results import MessageLevel

if TYPE_CHECKING:
    from tfvc.commands.registry import CommandDefinition
    from tfvc.models.results import CommandOutcome


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_outcome(outcome: CommandOutcome, console: Console, *, silent: bool = False) -> None:
    """Display the targets and messages of one command."""
    result = outcome.result
    if result is not None and result.affected and not silent:
        for target in result.targets:
            console.print(f"[cyan]{result.kind}[/cyan] {escape(target)}", highlight=False)
        console.print(f"[dim]{result.count} item(s) affected.[/dim]")

    for message in outcome.messages:
        if message.level == MessageLevel.ERROR:
            format_error(message.text, console)
        elif message.level == MessageLevel.WARNING:
            console.print(f"[yellow]{escape(message.text)}[/yellow]", highlight=False)
        else:
            console.print(escape(message.text), highlight=False)


def format_usage(definitions: list[CommandDefinition], console: Console) -> None:
    """Display the accepted usages of every command."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Command", style="green")
    table.add_column("Aliases", style="dim")
    table.add_column("Usage")

    for definition in definitions:
        usages = definition.usages or [definition.name]
        for i, usage in enumerate(usages):
            table.add_row(
                definition.name if i == 0 else "",
                ", ".join(definition.aliases) if i == 0 else "",
                escape(usage),
            )

    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
