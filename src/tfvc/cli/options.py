"""Shared option vocabulary for tfvc CLI commands.

Every command accepts the same set of click options; only the ones the
user actually supplied become Options, and the option-set resolver decides
whether they apply to the command.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

import click

from tfvc.exceptions import VersionSpecParseError
from tfvc.models.options import LockLevel, Option, OptionKind, OptionMap
from tfvc.models.results import ExitCode
from tfvc.models.versions import VersionSpec, parse_version_spec


class VersionSpecParamType(click.ParamType):
    """click type parsing a version qualifier such as ``C123`` or ``Lrelease``."""

    name = "versionspec"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> VersionSpec:
        if not isinstance(value, str):
            return value
        try:
            return parse_version_spec(value)
        except VersionSpecParseError as e:
            self.fail(str(e), param, ctx)


@dataclass(frozen=True)
class OptionSpec:
    """How one OptionKind appears on the command line."""

    kind: OptionKind
    decls: tuple[str, ...]
    help: str
    is_flag: bool = True
    type: Any = None
    convert: Callable[[Any], Any] = lambda v: v

    @property
    def dest(self) -> str:
        return self.kind.name.lower()

    def param(self) -> click.Option:
        if self.is_flag:
            return click.Option([*self.decls, self.dest], is_flag=True, default=False, help=self.help)
        return click.Option([*self.decls, self.dest], type=self.type, default=None, help=self.help)


OPTION_SPECS: tuple[OptionSpec, ...] = (
    OptionSpec(OptionKind.RECURSIVE, ("-r", "--recursive"), "Apply to items below folders."),
    OptionSpec(
        OptionKind.LOCK,
        ("--lock",),
        "Lock level to apply.",
        is_flag=False,
        type=click.Choice([level.value for level in LockLevel], case_sensitive=False),
        convert=lambda v: LockLevel(v.lower()),
    ),
    OptionSpec(OptionKind.DETECT, ("--detect",), "Detect changes in the workspace."),
    OptionSpec(OptionKind.NO_PROMPT, ("--noprompt",), "Never ask for confirmation."),
    OptionSpec(
        OptionKind.VERSION,
        ("--version",),
        "Version for items without a ';version' qualifier.",
        is_flag=False,
        type=VersionSpecParamType(),
    ),
    OptionSpec(OptionKind.ENCODING, ("--encoding",), "File encoding.", is_flag=False, type=str),
    OptionSpec(OptionKind.NO_IGNORE, ("--noignore",), "Do not apply local exclusions."),
    OptionSpec(OptionKind.SILENT, ("--silent",), "Do not report each pended item."),
    OptionSpec(OptionKind.UNCHANGED, ("--unchanged",), "Only pending changes with unchanged content."),
    OptionSpec(OptionKind.NO_GET, ("--noget",), "Do not update files on disk."),
    OptionSpec(OptionKind.LOGIN, ("--login",), "Credentials for the server.", is_flag=False, type=str),
    OptionSpec(
        OptionKind.COLLECTION, ("--collection",), "Server collection URL.", is_flag=False, type=str
    ),
)

_SPECS_BY_DEST = {spec.dest: spec for spec in OPTION_SPECS}
_LONG_NAMES = frozenset(
    decl[2:] for spec in OPTION_SPECS for decl in spec.decls if decl.startswith("--")
)

# -name or -name:value, the traditional spelling of options.
_TRADITIONAL_OPTION = re.compile(r"^-([A-Za-z]+)(?::(.*))?$", re.DOTALL)


def option_params() -> list[click.Option]:
    return [spec.param() for spec in OPTION_SPECS]


def build_option_map(values: Mapping[str, Any]) -> OptionMap:
    """Turn click's parsed parameter values into an OptionMap.

    Flags count only when set; valued options only when given.
    """
    options: list[Option] = []
    for dest, value in values.items():
        spec = _SPECS_BY_DEST.get(dest)
        if spec is None:
            continue
        if spec.is_flag:
            if value:
                options.append(Option(spec.kind, True, spec.kind.value))
        elif value is not None:
            options.append(Option(spec.kind, spec.convert(value), spec.kind.value))
    return OptionMap(options)


def normalize_option_syntax(args: Sequence[str]) -> list[str]:
    """Rewrite ``-name`` / ``-name:value`` options to click's ``--name[=value]``.

    Only names of known options are rewritten; everything after ``--`` is
    left alone.
    """
    normalized: list[str] = []
    passthrough = False
    for arg in args:
        if passthrough:
            normalized.append(arg)
            continue
        if arg == "--":
            passthrough = True
            normalized.append(arg)
            continue
        match = _TRADITIONAL_OPTION.match(arg)
        if match and match.group(1).lower() in _LONG_NAMES:
            name, value = match.group(1).lower(), match.group(2)
            normalized.append(f"--{name}" if value is None else f"--{name}={value}")
        else:
            normalized.append(arg)
    return normalized


class TfvcCommand(click.Command):
    """Command whose usage errors exit with FAILURE."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = int(ExitCode.FAILURE)
            raise
