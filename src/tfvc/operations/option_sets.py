"""Option-set resolution.

Matches the options and free-argument count of one invocation against the
ordered option sets a command declares. Pure: no I/O, no hidden state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet, Sequence

from tfvc.exceptions import (
    InvalidFreeArgumentCountError,
    InvalidOptionCombinationError,
    MissingRequiredOptionError,
    UnrecognizedOptionError,
)
from tfvc.models.options import GLOBAL_OPTION_KINDS, OptionKind

if TYPE_CHECKING:
    from tfvc.models.options import AcceptedOptionSet, OptionMap

logger = logging.getLogger(__name__)

_KIND_ORDER = {kind: i for i, kind in enumerate(OptionKind)}


def _ordered(kinds: AbstractSet[OptionKind]) -> list[OptionKind]:
    return sorted(kinds, key=_KIND_ORDER.__getitem__)


def resolve_option_set(
    supplied: AbstractSet[OptionKind],
    free_argument_count: int,
    declared: Sequence[AcceptedOptionSet],
    *,
    command: str = "command",
) -> AcceptedOptionSet:
    """Return the first declared option set the invocation fits.

    Args:
        supplied: Option kinds present on the command line.
        free_argument_count: Number of free arguments.
        declared: The command's option sets, in declaration order.
        command: Command name used in error messages.

    Raises:
        UnrecognizedOptionError: A supplied option is in no declared set.
        MissingRequiredOptionError: No set has all its required options.
        InvalidOptionCombinationError: Required options are satisfied
            somewhere, but no set accepts the whole combination.
        InvalidFreeArgumentCountError: Every set that accepts the options
            rejects the argument count.
        ValueError: *declared* is empty.
    """
    if not declared:
        raise ValueError(f"{command} declares no option sets")

    kinds = frozenset(supplied) - GLOBAL_OPTION_KINDS

    known: set[OptionKind] = set()
    for option_set in declared:
        known |= option_set.all_options
    unknown = kinds - known
    if unknown:
        raise UnrecognizedOptionError(command, _ordered(unknown)[0])

    option_compatible: list[AcceptedOptionSet] = []
    for option_set in declared:
        if option_set.required <= kinds and kinds <= option_set.all_options:
            if option_set.accepts_count(free_argument_count):
                logger.debug("%s matched option set %r", command, option_set.usage)
                return option_set
            option_compatible.append(option_set)

    if option_compatible:
        first = option_compatible[0]
        raise InvalidFreeArgumentCountError(
            command, free_argument_count, first.min_args, first.max_args
        )

    if any(option_set.required <= kinds for option_set in declared):
        raise InvalidOptionCombinationError(command, _ordered(kinds))

    raise MissingRequiredOptionError(command, _ordered(declared[0].required - kinds))


def check_option_conflict(
    options: OptionMap, first: OptionKind, second: OptionKind, *, command: str = "command"
) -> None:
    """Raise if two mutually exclusive options were both supplied."""
    if options.has(first) and options.has(second):
        raise InvalidOptionCombinationError(command, (first, second))
