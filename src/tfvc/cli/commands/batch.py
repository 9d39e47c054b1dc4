"""tfvc batch -- run commands from a command file (also ``tfvc @file``)."""

from __future__ import annotations

import logging
import shlex
from typing import IO, Optional, Sequence

import click

from tfvc.cli.formatting import format_error, get_console
from tfvc.cli.options import TfvcCommand
from tfvc.models.results import ExitCode

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "rem ")


def tokenize_command_line(line: str, params: Sequence[str] = ()) -> Optional[list[str]]:
    """Split one command-file line into arguments.

    ``%1`` .. ``%n`` are replaced by *params*. Returns None for blank
    lines and comments (``#`` or ``rem``).
    """
    line = line.strip()
    if not line or line.lower().startswith(_COMMENT_PREFIXES):
        return None
    # Highest index first so %1 does not eat the start of %10.
    for index in range(len(params), 0, -1):
        line = line.replace(f"%{index}", params[index - 1])
    return shlex.split(line)


def run_command_lines(
    ctx: click.Context,
    lines: IO[str],
    params: Sequence[str],
    *,
    continue_on_error: bool,
    output_separator: Optional[str],
) -> ExitCode:
    """Run each line as a separate tfvc invocation and compose the exit code.

    Stops at the first unsuccessful command unless *continue_on_error*,
    in which case any failure makes the whole run a partial success.
    """
    console = get_console()
    exit_code = ExitCode.SUCCESS
    for number, line in enumerate(lines, start=1):
        try:
            tokens = tokenize_command_line(line, params)
        except ValueError as e:
            format_error(f"Line {number}: {e}", console)
            line_code = ExitCode.FAILURE
        else:
            if tokens is None:
                continue
            logger.debug("Command file line %d: %s", number, tokens)
            line_code = _run_tokens(ctx, tokens)

        if output_separator is not None:
            console.print(output_separator, markup=False, highlight=False)
            click.echo(output_separator, err=True)

        if line_code != ExitCode.SUCCESS:
            if not continue_on_error:
                return line_code
            exit_code = ExitCode.PARTIAL_SUCCESS
    return exit_code


def _run_tokens(ctx: click.Context, tokens: list[str]) -> ExitCode:
    from tfvc.cli import cli

    root = logging.getLogger()
    level = root.level
    try:
        rv = cli.main(args=tokens, prog_name="tfvc", standalone_mode=False, obj=dict(ctx.obj))
    except click.ClickException as e:
        e.show()
        if e.exit_code == ExitCode.UNRECOGNIZED_COMMAND:
            return ExitCode.UNRECOGNIZED_COMMAND
        return ExitCode.FAILURE
    except click.Abort:
        format_error("Aborted.", get_console())
        return ExitCode.FAILURE
    finally:
        root.setLevel(level)
    return ExitCode(rv or 0)


@click.command(cls=TfvcCommand)
@click.argument("command_file", type=click.File("r"))
@click.argument("params", nargs=-1)
@click.option(
    "--continue-on-error", is_flag=True, help="Keep going after a command does not succeed."
)
@click.option("--output-separator", default=None, help="Line printed after every command.")
@click.pass_context
def batch(
    ctx: click.Context,
    command_file: IO[str],
    params: tuple[str, ...],
    continue_on_error: bool,
    output_separator: Optional[str],
) -> None:
    """Run one command per line from COMMAND_FILE ('-' reads standard input).

    Occurrences of %1, %2, ... in a line are replaced by PARAMS. Blank lines
    and lines starting with '#' or 'rem' are skipped.
    """
    if ctx.obj.get("in_batch"):
        format_error("Command files cannot be nested.", get_console())
        ctx.exit(int(ExitCode.FAILURE))

    ctx.obj["in_batch"] = True
    try:
        exit_code = run_command_lines(
            ctx,
            command_file,
            params,
            continue_on_error=continue_on_error,
            output_separator=output_separator,
        )
    finally:
        ctx.obj["in_batch"] = False
    ctx.exit(int(exit_code))
