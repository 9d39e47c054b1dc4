"""Pending change models.

PendingChange is a change the server already records for a workspace.
CandidateChange has the same shape but was only detected locally.
Both are transient: valid for one reconciliation pass.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, field_validator


class ChangeType(enum.Flag):
    """Bit-set of the kinds of change pended on one item."""

    NONE = 0
    ADD = enum.auto()
    EDIT = enum.auto()
    DELETE = enum.auto()
    RENAME = enum.auto()
    LOCK = enum.auto()
    UNDELETE = enum.auto()
    BRANCH = enum.auto()
    MERGE = enum.auto()

    def __str__(self) -> str:
        names = [m.name.lower() for m in ChangeType if m.value and m in self]
        return ", ".join(names) if names else "none"


class GetOptions(enum.Flag):
    """Options forwarded to the workspace's get machinery."""

    NONE = 0
    NO_DISK_UPDATE = enum.auto()


class PendOptions(enum.Flag):
    """Options forwarded to the workspace's pend machinery."""

    NONE = 0
    SILENT = enum.auto()
    APPLY_LOCAL_EXCLUSIONS = enum.auto()


class PendingChange(BaseModel):
    """A server-recorded change associated with a workspace."""

    model_config = {"frozen": True}

    change_type: ChangeType
    server_item: str
    local_item: Optional[str] = None
    item_id: int = 0

    @field_validator("change_type")
    @classmethod
    def _non_empty(cls, v: ChangeType) -> ChangeType:
        if not v:
            raise ValueError("change_type must contain at least one change")
        return v

    def __str__(self) -> str:
        return f"{self.change_type}: {self.local_item or self.server_item}"


class CandidateChange(PendingChange):
    """A locally detected change that has not been pended yet."""
