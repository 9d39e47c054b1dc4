"""Command executor.

Runs one invocation through the pipeline:

    option-set resolution -> item resolution -> [reconciliation]
    -> one workspace batch call -> result classification -> exit code

The executor is the only place that turns a result or an error into an
exit code. ``classify`` is a pure function of the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Optional, Sequence, Union

from tfvc.exceptions import CommandNotFoundError, TfvcError, WorkspaceProviderError
from tfvc.models.changes import GetOptions, PendOptions
from tfvc.models.config import CliConfig
from tfvc.models.items import RecursionType
from tfvc.models.options import LockLevel, OptionKind, OptionMap
from tfvc.models.results import CommandOutcome, ExitCode, OperationKind, OperationResult
from tfvc.models.versions import LATEST
from tfvc.operations.items import resolve_items
from tfvc.operations.option_sets import resolve_option_set
from tfvc.operations.reconcile import ReconcilePolicy, ReconcileResult, reconcile

if TYPE_CHECKING:
    from tfvc.commands.registry import CommandDefinition, CommandRegistry
    from tfvc.models.items import ItemSpec
    from tfvc.models.options import AcceptedOptionSet
    from tfvc.models.versions import VersionSpec
    from tfvc.protocols import Prompter, Workspace, WorkspaceProvider

logger = logging.getLogger(__name__)


# Exit code and message when a workspace call affected nothing.
ZERO_RESULT_OUTCOMES: dict[OperationKind, tuple[ExitCode, str]] = {
    OperationKind.ADD: (ExitCode.PARTIAL_SUCCESS, "No arguments matched any files to add."),
    OperationKind.DETECT_ADD: (ExitCode.PARTIAL_SUCCESS, "No adds detected."),
    OperationKind.DELETE: (ExitCode.FAILURE, "No arguments matched any files to delete."),
    OperationKind.DETECT_DELETE: (ExitCode.PARTIAL_SUCCESS, "No deletes detected."),
    OperationKind.CHECKOUT: (ExitCode.FAILURE, "No arguments matched any files to check out."),
    OperationKind.LOCK: (ExitCode.FAILURE, "No arguments matched any files to lock."),
    OperationKind.RENAME: (ExitCode.FAILURE, "The item could not be renamed."),
    OperationKind.UNDELETE: (ExitCode.FAILURE, "No items were undeleted."),
    OperationKind.UNDO: (ExitCode.FAILURE, "No pending changes were found to undo."),
    OperationKind.UNDO_UNCHANGED: (ExitCode.FAILURE, "No pending changes were undone."),
}

_POLICY_KINDS = {
    ReconcilePolicy.DETECT_ADD: OperationKind.DETECT_ADD,
    ReconcilePolicy.DETECT_DELETE: OperationKind.DETECT_DELETE,
    ReconcilePolicy.UNDO_UNCHANGED: OperationKind.UNDO_UNCHANGED,
}

ALL_UNCHANGED_MODIFIED = "All changes are modified."
UNDO_DECLINED = "No changes were undone."


def classify(result: Union[OperationResult, ReconcileResult]) -> tuple[ExitCode, Optional[str]]:
    """Map a command's result to an exit code and an optional message.

    Any positive count is success, no matter how many more items could
    have matched.
    """
    if isinstance(result, ReconcileResult):
        if result.policy == ReconcilePolicy.UNDO_UNCHANGED:
            if result.declined:
                return ExitCode.SUCCESS, UNDO_DECLINED
            if result.is_empty:
                return ExitCode.SUCCESS, ALL_UNCHANGED_MODIFIED
            return ExitCode.SUCCESS, None
        if result.is_empty:
            return ZERO_RESULT_OUTCOMES[_POLICY_KINDS[result.policy]]
        return ExitCode.SUCCESS, None

    if result.affected:
        return ExitCode.SUCCESS, None
    return ZERO_RESULT_OUTCOMES[result.kind]


@dataclass(frozen=True)
class Invocation:
    """A parsed command line: command name, typed options, free arguments."""

    command: str
    options: OptionMap = field(default_factory=OptionMap)
    free_args: tuple[str, ...] = ()


@dataclass
class CommandContext:
    """Boundaries shared by every command run in one process.

    Attributes:
        workspace_provider: Session boundary; called at most once per run,
            after all validation succeeded.
        prompter: Interactive confirmation boundary.
        config: Process configuration.
    """

    workspace_provider: Optional[WorkspaceProvider] = None
    prompter: Optional[Prompter] = None
    config: CliConfig = field(default_factory=CliConfig)


@dataclass
class CommandRun:
    """State of one command execution, handed to the command's run function."""

    definition: CommandDefinition
    option_set: AcceptedOptionSet
    options: OptionMap
    free_args: tuple[str, ...]
    context: CommandContext
    _workspace: Optional[Workspace] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def no_prompt(self) -> bool:
        return self.options.has(OptionKind.NO_PROMPT) or self.context.config.no_prompt

    def recursion(self, default: RecursionType = RecursionType.NONE) -> RecursionType:
        if self.options.has(OptionKind.RECURSIVE):
            return RecursionType.FULL
        return default

    def lock_level(self) -> LockLevel:
        return self.options.value(OptionKind.LOCK, LockLevel.UNCHANGED)

    def default_version(self) -> VersionSpec:
        return self.options.value(OptionKind.VERSION, LATEST)

    def get_options(self) -> GetOptions:
        if self.options.has(OptionKind.NO_GET):
            return GetOptions.NO_DISK_UPDATE
        return GetOptions.NONE

    def pend_options(self, *, apply_exclusions: bool = False) -> PendOptions:
        flags = PendOptions.NONE
        if self.options.has(OptionKind.SILENT):
            flags |= PendOptions.SILENT
        if apply_exclusions and not self.options.has(OptionKind.NO_IGNORE):
            flags |= PendOptions.APPLY_LOCAL_EXCLUSIONS
        return flags

    def resolve_items(
        self,
        args: Optional[Sequence[str]] = None,
        *,
        allow_wildcards: bool,
        expected_count: Union[int, Literal["any"]] = "any",
        recursion: RecursionType = RecursionType.NONE,
        allow_deletion_ids: bool = False,
    ) -> list[ItemSpec]:
        """Resolve *args* (the free arguments by default) into ItemSpecs."""
        return resolve_items(
            self.free_args if args is None else args,
            self.default_version(),
            allow_wildcards=allow_wildcards,
            expected_count=expected_count,
            recursion=recursion,
            allow_deletion_ids=allow_deletion_ids,
            cwd=self.context.config.cwd,
        )

    def workspace(self) -> Workspace:
        """Obtain the workspace from the session boundary, once."""
        if self._workspace is None:
            provider = self.context.workspace_provider
            if provider is None:
                provider = self.context.config.load_workspace_provider()
            self._workspace = provider(
                collection=self.options.value(OptionKind.COLLECTION),
                login=self.options.value(OptionKind.LOGIN),
            )
            if self._workspace is None:
                raise WorkspaceProviderError("The workspace provider returned no workspace")
        return self._workspace

    def reconcile(
        self, scope: Optional[Sequence[ItemSpec]], policy: ReconcilePolicy
    ) -> ReconcileResult:
        return reconcile(
            self.workspace(),
            scope,
            policy,
            prompter=self.context.prompter,
            no_prompt=self.no_prompt,
        )


class Executor:
    """Runs invocations against the registered commands."""

    def __init__(
        self, context: Optional[CommandContext] = None, registry: Optional[CommandRegistry] = None
    ) -> None:
        if registry is None:
            from tfvc.commands import default_registry

            registry = default_registry
        self.context = context or CommandContext()
        self.registry = registry

    def execute(self, invocation: Invocation) -> CommandOutcome:
        """Run *invocation*, raising typed errors for fatal conditions.

        Raises:
            CommandNotFoundError: Unknown command.
            OptionResolutionError: Options do not fit any option set.
            ArgumentError: Wrong free-argument count.
            InvalidSpecError: An item or version spec cannot be used.
            Exception: Anything raised by the workspace, unmodified.
        """
        definition = self.registry.get(invocation.command)
        option_set = resolve_option_set(
            invocation.options.kinds(),
            len(invocation.free_args),
            definition.option_sets,
            command=definition.name,
        )

        run = CommandRun(
            definition=definition,
            option_set=option_set,
            options=invocation.options,
            free_args=tuple(invocation.free_args),
            context=self.context,
        )
        logger.debug("Running %s with %r", definition.name, invocation.options)
        result = definition.run(run)

        exit_code, message = classify(result)
        outcome = CommandOutcome(command=definition.name, exit_code=exit_code)
        if isinstance(result, OperationResult):
            outcome.result = result
        if message is not None:
            if exit_code == ExitCode.FAILURE:
                outcome.fail(message)
            elif exit_code == ExitCode.PARTIAL_SUCCESS:
                outcome.warning(message)
            else:
                outcome.info(message)
        logger.debug("%s finished with %s", definition.name, exit_code.name)
        return outcome

    def run(self, invocation: Invocation) -> CommandOutcome:
        """Run *invocation* and fold every error into the outcome's exit code."""
        try:
            return self.execute(invocation)
        except CommandNotFoundError as e:
            outcome = CommandOutcome(command=invocation.command, error=e)
            outcome.fail(str(e), ExitCode.UNRECOGNIZED_COMMAND)
            return outcome
        except TfvcError as e:
            outcome = CommandOutcome(command=invocation.command, error=e)
            outcome.fail(str(e))
            return outcome
        except Exception as e:
            logger.error("Unexpected error running %s", invocation.command, exc_info=True)
            outcome = CommandOutcome(command=invocation.command, error=e)
            outcome.fail(str(e) or type(e).__name__)
            return outcome
