"""Pending-change reconciliation.

Turns a request that nominally targets "whatever changed" into a concrete,
finite target list:

- DETECT_ADD / DETECT_DELETE: candidate changes the workspace detects
  locally, filtered to adds (or deletes).
- UNDO_UNCHANGED: pending changes whose content is identical to the
  server baseline, confirmed interactively unless prompting is off.

Finding nothing is a legitimate empty result, never an error. Workspace
errors propagate unmodified.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from tfvc.models.changes import ChangeType
from tfvc.models.items import ItemSpec, RecursionType
from tfvc.models.versions import LATEST
from tfvc.paths import SERVER_ROOT
from tfvc.protocols import QuestionResponse

if TYPE_CHECKING:
    from tfvc.protocols import Prompter, Workspace

logger = logging.getLogger(__name__)


class ReconcilePolicy(str, enum.Enum):
    DETECT_ADD = "detect-add"
    DETECT_DELETE = "detect-delete"
    UNDO_UNCHANGED = "undo-unchanged"


_DETECT_FILTERS = {
    ReconcilePolicy.DETECT_ADD: ChangeType.ADD,
    ReconcilePolicy.DETECT_DELETE: ChangeType.DELETE,
}

WORKSPACE_ROOT_SCOPE = (ItemSpec(SERVER_ROOT, RecursionType.FULL, LATEST),)


@dataclass(frozen=True)
class ReconcileResult:
    """Targets computed by one reconciliation pass.

    Attributes:
        policy: The policy that produced this result.
        paths: Detected paths (detect policies).
        items: Minimal ItemSpecs to undo (undo-unchanged).
        examined: How many changes or candidates were looked at.
        declined: The user answered no to the confirmation prompt.
    """

    policy: ReconcilePolicy
    paths: tuple[str, ...] = ()
    items: tuple[ItemSpec, ...] = ()
    examined: int = 0
    declined: bool = False

    @property
    def targets(self) -> tuple:
        if self.policy == ReconcilePolicy.UNDO_UNCHANGED:
            return self.items
        return self.paths

    @property
    def is_empty(self) -> bool:
        return not self.targets


def _detect(
    workspace: Workspace, scope: Sequence[ItemSpec], policy: ReconcilePolicy
) -> ReconcileResult:
    wanted = _DETECT_FILTERS[policy]
    _, candidates = workspace.get_pending_changes_with_candidates(
        scope, include_candidates=True
    )

    paths: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        if wanted not in candidate.change_type:
            continue
        path = candidate.local_item or candidate.server_item
        if path not in seen:
            seen.add(path)
            paths.append(path)

    logger.debug(
        "%s: %d of %d candidate(s) selected", policy.value, len(paths), len(candidates)
    )
    return ReconcileResult(policy, paths=tuple(paths), examined=len(candidates))


def undo_unchanged_question(count: int) -> str:
    return f"Undo {count} unchanged pending change(s)?"


def _undo_unchanged(
    workspace: Workspace,
    scope: Optional[Sequence[ItemSpec]],
    prompter: Optional[Prompter],
    no_prompt: bool,
) -> ReconcileResult:
    policy = ReconcilePolicy.UNDO_UNCHANGED
    changes = workspace.get_pending_changes(scope or None)

    items = tuple(
        ItemSpec(change.server_item, RecursionType.NONE, LATEST)
        for change in changes
        if workspace.is_unchanged(change)
    )
    logger.debug("%s: %d of %d change(s) unchanged", policy.value, len(items), len(changes))

    if not items or no_prompt:
        return ReconcileResult(policy, items=items, examined=len(changes))

    if prompter is None:
        raise ValueError("a prompter is required when prompting is enabled")

    if prompter.ask(undo_unchanged_question(len(items))) != QuestionResponse.YES:
        logger.debug("%s: declined by user", policy.value)
        return ReconcileResult(policy, examined=len(changes), declined=True)

    return ReconcileResult(policy, items=items, examined=len(changes))


def reconcile(
    workspace: Workspace,
    scope: Optional[Sequence[ItemSpec]],
    policy: ReconcilePolicy,
    *,
    prompter: Optional[Prompter] = None,
    no_prompt: bool = False,
) -> ReconcileResult:
    """Compute the concrete targets for *policy* inside *scope*.

    Args:
        workspace: Workspace to query.
        scope: Explicit items, or None/empty for the whole workspace.
        policy: Which reconciliation to run.
        prompter: Confirmation boundary, used only by UNDO_UNCHANGED.
        no_prompt: Skip confirmation.

    Returns:
        A ReconcileResult; ``is_empty`` when nothing qualified or the user
        declined.
    """
    if policy == ReconcilePolicy.UNDO_UNCHANGED:
        return _undo_unchanged(workspace, scope, prompter, no_prompt)
    return _detect(workspace, scope or WORKSPACE_ROOT_SCOPE, policy)
