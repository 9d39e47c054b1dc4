"""tfvc exception hierarchy.

All tfvc-specific exceptions inherit from TfvcError. Every one of them is
fatal for the invocation that raised it and is raised before any workspace
call is made, except where noted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from tfvc.models.options import OptionKind


def _option_names(kinds: Iterable[OptionKind]) -> str:
    return ", ".join(f"-{k.value}" for k in kinds)


class TfvcError(Exception):
    """Base exception for all tfvc errors."""


class CommandNotFoundError(TfvcError):
    """Raised when no registered command matches the given name or alias."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unrecognized command: {name}")


class ArgumentError(TfvcError):
    """Raised for wrong or missing free arguments."""


class OptionResolutionError(TfvcError):
    """Base exception for options that do not fit any accepted option set."""


class UnrecognizedOptionError(OptionResolutionError):
    """Raised when an option belongs to none of a command's option sets."""

    def __init__(self, command: str, kind: OptionKind) -> None:
        self.command = command
        self.kind = kind
        super().__init__(f"The {command} command does not support the option -{kind.value}")


class MissingRequiredOptionError(OptionResolutionError):
    """Raised when no option set has all of its required options present."""

    def __init__(self, command: str, missing: Iterable[OptionKind]) -> None:
        self.command = command
        self.missing = tuple(missing)
        super().__init__(
            f"The {command} command requires the option(s): {_option_names(self.missing)}"
        )


class InvalidOptionCombinationError(OptionResolutionError):
    """Raised when the supplied options cannot be used together."""

    def __init__(self, command: str, kinds: Iterable[OptionKind]) -> None:
        self.command = command
        self.kinds = tuple(kinds)
        super().__init__(
            f"The options {_option_names(self.kinds)} cannot be used together "
            f"with the {command} command"
        )


class InvalidFreeArgumentCountError(OptionResolutionError, ArgumentError):
    """Raised when every option-compatible set rejects the argument count."""

    def __init__(
        self, command: str, count: int, min_args: int, max_args: int | None
    ) -> None:
        self.command = command
        self.count = count
        self.min_args = min_args
        self.max_args = max_args
        if max_args is None:
            expected = f"at least {min_args}"
        elif min_args == max_args:
            expected = str(min_args)
        else:
            expected = f"{min_args} to {max_args}"
        super().__init__(
            f"The {command} command expects {expected} free argument(s), got {count}"
        )


class InvalidSpecError(TfvcError):
    """Base exception for item or version specs that cannot be used."""


class ItemSpecParseError(InvalidSpecError):
    """Raised when a free argument cannot be parsed as an item spec."""

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid item specification '{argument}': {reason}")


class VersionSpecParseError(InvalidSpecError):
    """Raised when a version qualifier cannot be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid version specification '{text}': {reason}")


class WildcardNotAllowedError(InvalidSpecError):
    """Raised when a wildcard is used where the command forbids one."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Wildcards are not allowed in this argument: {path}")


class WrongArgumentCountError(InvalidSpecError):
    """Raised when the number of resolved items differs from the expected count."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected exactly {expected} item(s), got {actual}")


class WorkspaceProviderError(TfvcError):
    """Raised when no workspace can be obtained from the configured provider."""
