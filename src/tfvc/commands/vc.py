"""Version-control commands: add, delete, checkout, lock, rename, undelete, undo.

Each run function resolves its items, reconciles when the command
auto-detects its targets, and invokes exactly one workspace batch call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from tfvc.commands.registry import default_registry
from tfvc.models.items import RecursionType
from tfvc.models.options import AcceptedOptionSet, OptionKind
from tfvc.models.results import OperationKind, OperationResult
from tfvc.operations.items import resolve_new_name
from tfvc.operations.option_sets import check_option_conflict
from tfvc.operations.reconcile import ReconcilePolicy, ReconcileResult

if TYPE_CHECKING:
    from tfvc.commands.executor import CommandRun

K = OptionKind


def _paths(items) -> list[str]:
    return [item.path for item in items]


@default_registry.command(
    "add",
    option_sets=[
        AcceptedOptionSet(
            optional={K.RECURSIVE, K.LOCK, K.ENCODING, K.NO_IGNORE, K.SILENT, K.DETECT},
            usage="add [itemspec...] [-lock:none|checkin|checkout] [-encoding:name] "
            "[-recursive] [-noignore] [-silent] [-detect]",
        ),
    ],
)
def add(run: CommandRun) -> Union[OperationResult, ReconcileResult]:
    """Pend adds for new files.

    Without item arguments, or with -detect, the workspace is scanned for
    untracked files and those are added.
    """
    check_option_conflict(run.options, K.LOCK, K.DETECT, command=run.name)
    pend_options = run.pend_options(apply_exclusions=True)

    if not run.free_args or run.options.has(K.DETECT):
        scope = run.resolve_items(
            allow_wildcards=False, recursion=run.recursion(RecursionType.ONE_LEVEL)
        )
        detected = run.reconcile(scope, ReconcilePolicy.DETECT_ADD)
        if detected.is_empty:
            return detected
        kind, paths, recursion = OperationKind.DETECT_ADD, list(detected.paths), RecursionType.NONE
    else:
        recursion = run.recursion()
        items = run.resolve_items(allow_wildcards=True, recursion=recursion)
        kind, paths = OperationKind.ADD, _paths(items)

    count = run.workspace().pend_add(
        paths,
        recursion=recursion,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=pend_options,
        encoding=run.options.value(K.ENCODING),
    )
    return OperationResult(kind, count, tuple(paths))


@default_registry.command(
    "delete",
    aliases=["del"],
    option_sets=[
        AcceptedOptionSet(
            optional={K.LOCK, K.RECURSIVE},
            min_args=1,
            usage="delete itemspec... [-lock:none|checkin|checkout] [-recursive]",
        ),
        AcceptedOptionSet(
            required={K.DETECT},
            optional={K.RECURSIVE},
            usage="delete -detect [itemspec...] [-recursive]",
        ),
    ],
)
def delete(run: CommandRun) -> Union[OperationResult, ReconcileResult]:
    """Pend deletes, either for the given items or for files missing on disk."""
    if K.DETECT in run.option_set.required:
        scope = run.resolve_items(
            allow_wildcards=False, recursion=run.recursion(RecursionType.ONE_LEVEL)
        )
        detected = run.reconcile(scope, ReconcilePolicy.DETECT_DELETE)
        if detected.is_empty:
            return detected
        kind, paths, recursion = OperationKind.DETECT_DELETE, list(detected.paths), RecursionType.NONE
    else:
        recursion = run.recursion()
        kind, paths = OperationKind.DELETE, _paths(
            run.resolve_items(allow_wildcards=True, recursion=recursion)
        )

    count = run.workspace().pend_delete(
        paths,
        recursion=recursion,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=run.pend_options(),
    )
    return OperationResult(kind, count, tuple(paths))


@default_registry.command(
    "checkout",
    aliases=["edit"],
    option_sets=[
        AcceptedOptionSet(
            optional={K.LOCK, K.RECURSIVE, K.ENCODING, K.SILENT},
            min_args=1,
            usage="checkout itemspec... [-lock:none|checkin|checkout] [-recursive] "
            "[-encoding:name] [-silent]",
        ),
    ],
)
def checkout(run: CommandRun) -> OperationResult:
    """Pend edits on existing files."""
    recursion = run.recursion()
    paths = _paths(run.resolve_items(allow_wildcards=True, recursion=recursion))
    count = run.workspace().pend_edit(
        paths,
        recursion=recursion,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=run.pend_options(),
        encoding=run.options.value(K.ENCODING),
    )
    return OperationResult(OperationKind.CHECKOUT, count, tuple(paths))


@default_registry.command(
    "lock",
    option_sets=[
        AcceptedOptionSet(
            required={K.LOCK},
            optional={K.RECURSIVE, K.NO_PROMPT},
            min_args=1,
            usage="lock -lock:none|checkin|checkout itemspec... [-recursive] [-noprompt]",
        ),
    ],
)
def lock(run: CommandRun) -> OperationResult:
    """Lock or unlock items on the server."""
    recursion = run.recursion()
    paths = _paths(run.resolve_items(allow_wildcards=True, recursion=recursion))
    count = run.workspace().set_lock(
        paths,
        recursion=recursion,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=run.pend_options(),
    )
    return OperationResult(OperationKind.LOCK, count, tuple(paths))


@default_registry.command(
    "rename",
    aliases=["move", "ren"],
    option_sets=[
        AcceptedOptionSet(
            optional={K.LOCK, K.SILENT},
            min_args=2,
            max_args=2,
            usage="rename olditem newitem [-lock:none|checkin|checkout] [-silent]",
        ),
    ],
)
def rename(run: CommandRun) -> OperationResult:
    """Pend a rename (move) of one item."""
    old, new = run.resolve_items(allow_wildcards=False, expected_count=2)
    count = run.workspace().pend_rename(
        old.path,
        new.path,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=run.pend_options(),
    )
    return OperationResult(OperationKind.RENAME, count, (old.path, new.path))


@default_registry.command(
    "undelete",
    option_sets=[
        AcceptedOptionSet(
            optional={K.LOCK, K.RECURSIVE, K.NO_GET, K.VERSION},
            min_args=1,
            max_args=2,
            usage="undelete itemspec[;Xdeletionid] [newname] [-lock:none|checkin|checkout] "
            "[-recursive] [-noget] [-version:versionspec]",
        ),
    ],
)
def undelete(run: CommandRun) -> OperationResult:
    """Pend the restoration of a deleted item, optionally under a new name."""
    (item,) = run.resolve_items(
        run.free_args[:1],
        allow_wildcards=False,
        expected_count=1,
        recursion=run.recursion(),
        allow_deletion_ids=True,
    )
    new_name = None
    if len(run.free_args) > 1:
        new_name = resolve_new_name(run.free_args[1], run.context.config.cwd)
    count = run.workspace().pend_undelete(
        item,
        new_name,
        lock_level=run.lock_level(),
        get_options=run.get_options(),
        pend_options=run.pend_options(),
    )
    targets = (item.to_text(),) if new_name is None else (item.to_text(), new_name)
    return OperationResult(OperationKind.UNDELETE, count, targets)


@default_registry.command(
    "undo",
    option_sets=[
        AcceptedOptionSet(
            optional={K.RECURSIVE, K.NO_PROMPT},
            min_args=1,
            usage="undo itemspec... [-recursive] [-noprompt]",
        ),
        AcceptedOptionSet(
            required={K.UNCHANGED},
            optional={K.RECURSIVE, K.NO_PROMPT},
            usage="undo -unchanged [itemspec...] [-recursive] [-noprompt]",
        ),
    ],
)
def undo(run: CommandRun) -> Union[OperationResult, ReconcileResult]:
    """Undo pending changes, or only those whose content is unchanged."""
    if K.UNCHANGED in run.option_set.required:
        scope = run.resolve_items(
            allow_wildcards=False, recursion=run.recursion(RecursionType.ONE_LEVEL)
        )
        unchanged = run.reconcile(scope, ReconcilePolicy.UNDO_UNCHANGED)
        if unchanged.is_empty:
            return unchanged
        kind, items = OperationKind.UNDO_UNCHANGED, list(unchanged.items)
    else:
        kind = OperationKind.UNDO
        items = run.resolve_items(allow_wildcards=True, recursion=run.recursion())

    count = run.workspace().undo(items, get_options=run.get_options())
    return OperationResult(kind, count, tuple(item.path for item in items))
