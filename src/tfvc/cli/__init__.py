"""tfvc CLI -- terminal interface for the tfvc command core.

This module is NEVER imported from tfvc/__init__.py.
It is only loaded via the ``tfvc`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Optional, Sequence

import click
from click.core import ParameterSource

from tfvc.cli.formatting import get_console
from tfvc.cli.options import normalize_option_syntax
from tfvc.exceptions import CommandNotFoundError
from tfvc.models.results import ExitCode

if TYPE_CHECKING:
    from tfvc.commands.executor import Executor

# Group options taking a value; needed to find the first command token.
_VALUED_GROUP_OPTIONS = frozenset({"--workspace-provider", "--log-level"})


def expand_command_file_syntax(args: Sequence[str]) -> list[str]:
    """Rewrite ``@file`` (or a bare ``@`` for stdin) into ``batch file``."""
    expanded = list(args)
    i = 0
    while i < len(expanded):
        arg = expanded[i]
        if arg in _VALUED_GROUP_OPTIONS:
            i += 2
            continue
        if arg.startswith("-"):
            i += 1
            continue
        if arg.startswith("@"):
            expanded[i : i + 1] = ["batch", arg[1:] or "-"]
        break
    return expanded


class TfvcGroup(click.Group):
    """Group resolving command names and aliases through the registry.

    Command lookup is case-insensitive. Usage errors exit with FAILURE,
    except unknown commands, which exit with UNRECOGNIZED_COMMAND.
    """

    def main(self, args: Optional[Sequence[str]] = None, *main_args: Any, **kwargs: Any) -> Any:
        if args is None:
            args = sys.argv[1:]
        args = normalize_option_syntax(expand_command_file_syntax(args))
        return super().main(args, *main_args, **kwargs)

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        from tfvc.commands import default_registry

        try:
            definition = default_registry.get(cmd_name)
        except CommandNotFoundError:
            return super().get_command(ctx, cmd_name.lower())
        return super().get_command(ctx, definition.name)

    def resolve_command(self, ctx: click.Context, args: list[str]) -> Any:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            e.exit_code = int(ExitCode.UNRECOGNIZED_COMMAND)
            raise

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = int(ExitCode.FAILURE)
            raise


@click.group(cls=TfvcGroup)
@click.option(
    "--workspace-provider",
    default=None,
    envvar="TFVC_WORKSPACE_PROVIDER",
    help="Workspace provider as 'module:callable'.",
)
@click.option(
    "--noprompt",
    "no_prompt",
    is_flag=True,
    default=False,
    envvar="TFVC_NOPROMPT",
    help="Never ask for confirmation.",
)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="TFVC_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level.",
)
@click.pass_context
def cli(ctx: click.Context, workspace_provider: str | None, no_prompt: bool, log_level: str) -> None:
    """tfvc: version-control commands against a workspace."""
    from tfvc.models.config import CliConfig

    ctx.ensure_object(dict)
    config = ctx.obj.get("config")
    if config is None:
        ctx.obj["config"] = CliConfig(
            no_prompt=no_prompt,
            log_level=log_level,
            workspace_provider=workspace_provider,
        )
        logging.basicConfig(
            level=ctx.obj["config"].log_level_number,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return

    # A command-file line inherits the outer configuration; global options
    # given on the line itself override it for that line only.
    overrides = {
        name: value
        for name, value in (
            ("no_prompt", no_prompt),
            ("log_level", log_level),
            ("workspace_provider", workspace_provider),
        )
        if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE
    }
    if overrides:
        ctx.obj["config"] = CliConfig(**{**config.model_dump(), **overrides})
        if "log_level" in overrides:
            logging.getLogger().setLevel(ctx.obj["config"].log_level_number)


def _get_executor(ctx: click.Context) -> "Executor":
    """Build an Executor from Click context.

    ``ctx.obj`` may carry a ``workspace_provider`` and a ``prompter`` in
    place of the configured ones.
    """
    from tfvc.cli.prompt import ConsolePrompter
    from tfvc.commands.executor import CommandContext, Executor

    obj = ctx.obj
    prompter = obj.get("prompter")
    if prompter is None:
        prompter = ConsolePrompter(get_console())
    context = CommandContext(
        workspace_provider=obj.get("workspace_provider"),
        prompter=prompter,
        config=obj["config"],
    )
    return Executor(context)


def main(args: Optional[Sequence[str]] = None) -> None:
    """Console script entry point."""
    cli.main(args=args, prog_name="tfvc")


# Register subcommands after cli group is defined
from tfvc.cli.commands.vc import build_commands  # noqa: E402
from tfvc.cli.commands.batch import batch  # noqa: E402
from tfvc.cli.commands.usage import usage  # noqa: E402

for _command in build_commands():
    cli.add_command(_command)
cli.add_command(batch)
cli.add_command(usage)
