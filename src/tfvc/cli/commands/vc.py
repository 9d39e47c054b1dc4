"""tfvc add/delete/checkout/... -- click commands generated from the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from tfvc.cli.formatting import format_outcome, get_console
from tfvc.cli.options import TfvcCommand, build_option_map, option_params
from tfvc.models.options import OptionKind

if TYPE_CHECKING:
    from tfvc.commands.registry import CommandDefinition


def _epilog(definition: CommandDefinition) -> str:
    lines = ["\b", "Accepted forms:"]
    lines.extend(f"  {usage}" for usage in definition.usages)
    if definition.aliases:
        lines.append(f"Aliases: {', '.join(definition.aliases)}")
    return "\n".join(lines)


def build_command(definition: CommandDefinition) -> click.Command:
    """Create the click command for one registered definition.

    The command accepts every option kind; whether the supplied combination
    fits the command is decided by the executor.
    """

    @click.pass_context
    def callback(ctx: click.Context, items: tuple[str, ...], **values: Any) -> None:
        from tfvc.cli import _get_executor
        from tfvc.commands.executor import Invocation

        console = get_console()
        options = build_option_map(values)
        outcome = _get_executor(ctx).run(Invocation(definition.name, options, tuple(items)))
        format_outcome(outcome, console, silent=options.has(OptionKind.SILENT))
        ctx.exit(int(outcome.exit_code))

    return TfvcCommand(
        name=definition.name,
        callback=callback,
        params=[click.Argument(["items"], nargs=-1), *option_params()],
        help=definition.help,
        epilog=_epilog(definition),
    )


def build_commands() -> list[click.Command]:
    from tfvc.commands import default_registry

    return [build_command(definition) for definition in default_registry]
