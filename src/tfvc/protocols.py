"""Protocol definitions for tfvc.

Defines the boundaries the command core consumes but does not implement:
the workspace capability surface, the session boundary that hands out a
workspace, and the interactive confirmation boundary.

No transport or storage imports allowed in this module -- pure protocols.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from tfvc.models.changes import CandidateChange, GetOptions, PendingChange, PendOptions
    from tfvc.models.items import ItemSpec, RecursionType
    from tfvc.models.options import LockLevel


class QuestionResponse(str, enum.Enum):
    YES = "yes"
    NO = "no"


@runtime_checkable
class Workspace(Protocol):
    """Batch operations and queries against one versioned workspace.

    Every batch operation returns the number of items actually affected;
    0 means nothing matched. Errors from the server or disk are raised
    unmodified.
    """

    def pend_add(
        self,
        paths: Sequence[str],
        *,
        recursion: RecursionType,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
        encoding: Optional[str] = None,
    ) -> int: ...

    def pend_delete(
        self,
        paths: Sequence[str],
        *,
        recursion: RecursionType,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
    ) -> int: ...

    def pend_edit(
        self,
        paths: Sequence[str],
        *,
        recursion: RecursionType,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
        encoding: Optional[str] = None,
    ) -> int: ...

    def pend_rename(
        self,
        old_path: str,
        new_path: str,
        *,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
    ) -> int: ...

    def pend_undelete(
        self,
        item: ItemSpec,
        new_name: Optional[str],
        *,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
    ) -> int: ...

    def set_lock(
        self,
        paths: Sequence[str],
        *,
        recursion: RecursionType,
        lock_level: LockLevel,
        get_options: GetOptions,
        pend_options: PendOptions,
    ) -> int: ...

    def undo(self, items: Sequence[ItemSpec], *, get_options: GetOptions) -> int: ...

    def get_pending_changes(
        self, scope: Optional[Sequence[ItemSpec]] = None
    ) -> list[PendingChange]:
        """Pending changes inside *scope*, or all of them when None."""
        ...

    def get_pending_changes_with_candidates(
        self, scope: Sequence[ItemSpec], *, include_candidates: bool
    ) -> tuple[list[PendingChange], list[CandidateChange]]: ...

    def is_unchanged(self, change: PendingChange) -> bool:
        """Whether a pended change is content-identical to its baseline."""
        ...


class WorkspaceProvider(Protocol):
    """Session boundary: returns an authenticated workspace handle.

    Receives the values of the global -collection and -login options.
    """

    def __call__(
        self, *, collection: Optional[str] = None, login: Optional[str] = None
    ) -> Workspace: ...


@runtime_checkable
class Prompter(Protocol):
    """Interactive confirmation boundary."""

    def ask(self, question: str) -> QuestionResponse: ...
