"""Shared test fixtures for tfvc.

Provides a recording in-memory workspace, a scripted prompter, and an
executor wired to both.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pytest

from tfvc.commands.executor import CommandContext, Executor, Invocation
from tfvc.models.changes import CandidateChange, ChangeType, PendingChange
from tfvc.models.config import CliConfig
from tfvc.models.items import ItemSpec
from tfvc.models.options import Option, OptionKind, OptionMap
from tfvc.paths import is_child_or_equal
from tfvc.protocols import QuestionResponse

_QUERIES = frozenset({"get_pending_changes", "get_pending_changes_with_candidates", "is_unchanged"})


def _in_scope(change: PendingChange, scope: Sequence[ItemSpec]) -> bool:
    for item in scope:
        path = change.server_item if item.is_server_path else change.local_item
        if path and is_child_or_equal(item.path, path, item.recursion):
            return True
    return False


class FakeWorkspace:
    """In-memory workspace recording every call.

    Batch operations return ``counts[name]`` when configured, otherwise the
    number of targets they were given.
    """

    def __init__(
        self,
        *,
        pending: Sequence[PendingChange] = (),
        candidates: Sequence[CandidateChange] = (),
        unchanged: Sequence[str] = (),
        counts: Optional[dict[str, int]] = None,
    ) -> None:
        self.pending = list(pending)
        self.candidates = list(candidates)
        self.unchanged = set(unchanged)
        self.counts = counts or {}
        self.calls: list[tuple[str, tuple, dict]] = []

    def _record(self, name: str, *args, **kwargs) -> None:
        self.calls.append((name, args, kwargs))

    def _count(self, name: str, default: int) -> int:
        return self.counts.get(name, default)

    def calls_to(self, name: str) -> list[tuple[str, tuple, dict]]:
        return [c for c in self.calls if c[0] == name]

    @property
    def batch_calls(self) -> list[tuple[str, tuple, dict]]:
        return [c for c in self.calls if c[0] not in _QUERIES]

    # Batch operations

    def pend_add(self, paths, **kwargs) -> int:
        self._record("pend_add", list(paths), **kwargs)
        return self._count("pend_add", len(paths))

    def pend_delete(self, paths, **kwargs) -> int:
        self._record("pend_delete", list(paths), **kwargs)
        return self._count("pend_delete", len(paths))

    def pend_edit(self, paths, **kwargs) -> int:
        self._record("pend_edit", list(paths), **kwargs)
        return self._count("pend_edit", len(paths))

    def pend_rename(self, old_path, new_path, **kwargs) -> int:
        self._record("pend_rename", old_path, new_path, **kwargs)
        return self._count("pend_rename", 1)

    def pend_undelete(self, item, new_name, **kwargs) -> int:
        self._record("pend_undelete", item, new_name, **kwargs)
        return self._count("pend_undelete", 1)

    def set_lock(self, paths, **kwargs) -> int:
        self._record("set_lock", list(paths), **kwargs)
        return self._count("set_lock", len(paths))

    def undo(self, items, **kwargs) -> int:
        self._record("undo", list(items), **kwargs)
        return self._count("undo", len(items))

    # Queries

    def get_pending_changes(self, scope=None) -> list[PendingChange]:
        self._record("get_pending_changes", scope)
        if not scope:
            return list(self.pending)
        return [c for c in self.pending if _in_scope(c, scope)]

    def get_pending_changes_with_candidates(self, scope, *, include_candidates):
        self._record("get_pending_changes_with_candidates", scope, include_candidates=include_candidates)
        pending = [c for c in self.pending if _in_scope(c, scope)]
        candidates = [c for c in self.candidates if _in_scope(c, scope)] if include_candidates else []
        return pending, candidates

    def is_unchanged(self, change: PendingChange) -> bool:
        return change.server_item in self.unchanged


class FakePrompter:
    """Prompter answering every question with a fixed response."""

    def __init__(self, answer: QuestionResponse = QuestionResponse.YES) -> None:
        self.answer = answer
        self.questions: list[str] = []

    def ask(self, question: str) -> QuestionResponse:
        self.questions.append(question)
        return self.answer


class RecordingProvider:
    """Workspace provider handing out one workspace and recording its arguments."""

    def __init__(self, workspace: FakeWorkspace) -> None:
        self.workspace = workspace
        self.calls: list[dict] = []

    def __call__(self, *, collection=None, login=None) -> FakeWorkspace:
        self.calls.append({"collection": collection, "login": login})
        return self.workspace


def candidate(change_type: ChangeType, server_item: str, local_item: Optional[str] = None):
    return CandidateChange(change_type=change_type, server_item=server_item, local_item=local_item)


def pending(change_type: ChangeType, server_item: str, local_item: Optional[str] = None):
    return PendingChange(change_type=change_type, server_item=server_item, local_item=local_item)


def invocation(command: str, *free_args: str, **options) -> Invocation:
    """Build an Invocation; ``options`` maps option names (``noprompt``) to values."""
    return Invocation(
        command,
        OptionMap(Option(OptionKind(name), value) for name, value in options.items()),
        tuple(free_args),
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace() -> FakeWorkspace:
    return FakeWorkspace()


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def provider(workspace: FakeWorkspace) -> RecordingProvider:
    return RecordingProvider(workspace)


@pytest.fixture
def executor(provider: RecordingProvider, prompter: FakePrompter, tmp_path) -> Executor:
    """Executor whose relative local paths resolve under tmp_path."""
    context = CommandContext(
        workspace_provider=provider,
        prompter=prompter,
        config=CliConfig(cwd=str(tmp_path)),
    )
    return Executor(context)
