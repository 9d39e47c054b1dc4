"""Version specifications.

A VersionSpec is one of a closed set of frozen variants. ``parse_version_spec``
turns the text of a version qualifier (the part after ``;`` in an item spec,
or the value of -version) into a variant, and ``to_text`` reproduces it.

    T                 latest
    C123 / 123        changeset 123
    Lrelease@$/proj   label "release" scoped to $/proj
    D2024-01-31       date (ISO 8601 or mm/dd/yyyy)
    W / Wname@owner   workspace version
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from tfvc.exceptions import VersionSpecParseError

_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S")


@dataclass(frozen=True)
class LatestVersionSpec:
    """The latest version on the server."""

    def to_text(self) -> str:
        return "T"


@dataclass(frozen=True)
class ChangesetVersionSpec:
    changeset: int

    def __post_init__(self) -> None:
        if self.changeset < 1:
            raise VersionSpecParseError(f"C{self.changeset}", "changeset numbers start at 1")

    def to_text(self) -> str:
        return f"C{self.changeset}"


@dataclass(frozen=True)
class LabelVersionSpec:
    """A label, optionally qualified by the server path it is scoped to."""

    name: str
    scope: Optional[str] = None

    def to_text(self) -> str:
        if self.scope:
            return f"L{self.name}@{self.scope}"
        return f"L{self.name}"


@dataclass(frozen=True)
class DateVersionSpec:
    date: datetime

    def to_text(self) -> str:
        return f"D{self.date.isoformat()}"


@dataclass(frozen=True)
class WorkspaceVersionSpec:
    """The version last fetched into a workspace.

    ``name`` of None means the workspace the command runs in.
    """

    name: Optional[str] = None
    owner: Optional[str] = None

    def to_text(self) -> str:
        if self.name is None:
            return "W"
        if self.owner:
            return f"W{self.name}@{self.owner}"
        return f"W{self.name}"


VersionSpec = Union[
    LatestVersionSpec,
    ChangesetVersionSpec,
    LabelVersionSpec,
    DateVersionSpec,
    WorkspaceVersionSpec,
]

LATEST = LatestVersionSpec()


def _parse_date(text: str, value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise VersionSpecParseError(text, f"'{value}' is not a recognized date")


def _split_at(value: str) -> tuple[str, Optional[str]]:
    name, sep, rest = value.partition("@")
    return name, (rest if sep else None)


def parse_version_spec(text: str) -> VersionSpec:
    """Parse a version qualifier into a VersionSpec.

    Raises:
        VersionSpecParseError: If the text is empty or malformed.
    """
    stripped = text.strip()
    if not stripped:
        raise VersionSpecParseError(text, "empty version")

    if stripped.isdigit():
        return ChangesetVersionSpec(int(stripped))

    prefix, value = stripped[0].upper(), stripped[1:]

    if prefix == "T":
        if value:
            raise VersionSpecParseError(text, "latest version takes no value")
        return LATEST

    if prefix == "C":
        if not value.isdigit():
            raise VersionSpecParseError(text, "changeset must be a number")
        return ChangesetVersionSpec(int(value))

    if prefix == "L":
        name, scope = _split_at(value)
        if not name:
            raise VersionSpecParseError(text, "label name is empty")
        if scope is not None and not scope:
            raise VersionSpecParseError(text, "label scope is empty")
        return LabelVersionSpec(name=name, scope=scope)

    if prefix == "D":
        if not value:
            raise VersionSpecParseError(text, "date is empty")
        return DateVersionSpec(_parse_date(text, value))

    if prefix == "W":
        if not value:
            return WorkspaceVersionSpec()
        name, owner = _split_at(value)
        if not name:
            raise VersionSpecParseError(text, "workspace name is empty")
        return WorkspaceVersionSpec(name=name, owner=owner or None)

    raise VersionSpecParseError(text, f"unknown version type '{stripped[0]}'")
