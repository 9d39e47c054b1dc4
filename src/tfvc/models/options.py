"""Option domain models for tfvc.

Option is a single already-parsed command-line switch.
OptionMap is the per-invocation lookup of options by kind.
AcceptedOptionSet declares one usage shape a command accepts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional

from pydantic import BaseModel, model_validator


class OptionKind(str, enum.Enum):
    """Every option the client understands, in display order."""

    RECURSIVE = "recursive"
    LOCK = "lock"
    DETECT = "detect"
    NO_PROMPT = "noprompt"
    VERSION = "version"
    ENCODING = "encoding"
    NO_IGNORE = "noignore"
    SILENT = "silent"
    UNCHANGED = "unchanged"
    NO_GET = "noget"
    LOGIN = "login"
    COLLECTION = "collection"

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


# Accepted by every command; never part of option-set matching.
GLOBAL_OPTION_KINDS: frozenset[OptionKind] = frozenset({
    OptionKind.LOGIN,
    OptionKind.COLLECTION,
})


class LockLevel(str, enum.Enum):
    """Lock level requested with -lock."""

    NONE = "none"
    CHECKIN = "checkin"
    CHECKOUT = "checkout"
    UNCHANGED = "unchanged"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Option:
    """A typed, already-parsed command-line switch.

    Attributes:
        kind: Which option this is.
        value: The parsed value (True for plain flags).
        alias: The spelling the user typed, for messages.
    """

    kind: OptionKind
    value: Any = True
    alias: Optional[str] = None

    def __str__(self) -> str:
        name = self.alias or self.kind.value
        if self.value is True:
            return f"-{name}"
        return f"-{name}:{self.value}"


class OptionMap(Mapping[OptionKind, Option]):
    """Options supplied to one invocation, keyed by kind.

    Built once from the parsed options. When a kind is supplied more than
    once the last occurrence wins.
    """

    def __init__(self, options: Iterable[Option] = ()) -> None:
        self._options: dict[OptionKind, Option] = {}
        for option in options:
            self._options[option.kind] = option

    def __getitem__(self, kind: OptionKind) -> Option:
        return self._options[kind]

    def __iter__(self) -> Iterator[OptionKind]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionMap({', '.join(str(o) for o in self._options.values())})"

    def kinds(self) -> frozenset[OptionKind]:
        return frozenset(self._options)

    def has(self, kind: OptionKind) -> bool:
        return kind in self._options

    def value(self, kind: OptionKind, default: Any = None) -> Any:
        """Return the parsed value for *kind*, or *default* when absent."""
        option = self._options.get(kind)
        return default if option is None else option.value


class AcceptedOptionSet(BaseModel):
    """One valid shape of a command invocation.

    ``max_args`` of None means any number of free arguments.
    """

    model_config = {"frozen": True}

    required: frozenset[OptionKind] = frozenset()
    optional: frozenset[OptionKind] = frozenset()
    min_args: int = 0
    max_args: Optional[int] = None
    usage: str = ""

    @model_validator(mode="after")
    def _check_shape(self) -> AcceptedOptionSet:
        overlap = self.required & self.optional
        if overlap:
            names = ", ".join(sorted(k.value for k in overlap))
            raise ValueError(f"options cannot be both required and optional: {names}")
        if self.min_args < 0:
            raise ValueError("min_args must be >= 0")
        if self.max_args is not None and self.max_args < self.min_args:
            raise ValueError("max_args must be >= min_args")
        return self

    @property
    def all_options(self) -> frozenset[OptionKind]:
        return self.required | self.optional

    def accepts_count(self, count: int) -> bool:
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args
