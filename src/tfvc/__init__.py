"""tfvc: command-interpretation core for a version-control command-line client.

Turns a raw invocation (command, typed options, free arguments) into
validated operations against a versioned workspace, reconciling local state
with pending changes when a command must detect what to act on.
"""

from tfvc._version import __version__

# Pipeline entry point
from tfvc.commands.executor import (
    CommandContext,
    CommandRun,
    Executor,
    Invocation,
    classify,
)
from tfvc.commands.registry import CommandDefinition, CommandRegistry
from tfvc.commands import default_registry

# Options
from tfvc.models.options import (
    AcceptedOptionSet,
    GLOBAL_OPTION_KINDS,
    LockLevel,
    Option,
    OptionKind,
    OptionMap,
)

# Items and versions
from tfvc.models.items import ItemSpec, RecursionType
from tfvc.models.versions import (
    LATEST,
    ChangesetVersionSpec,
    DateVersionSpec,
    LabelVersionSpec,
    LatestVersionSpec,
    VersionSpec,
    WorkspaceVersionSpec,
    parse_version_spec,
)

# Changes
from tfvc.models.changes import (
    CandidateChange,
    ChangeType,
    GetOptions,
    PendingChange,
    PendOptions,
)

# Results and configuration
from tfvc.models.results import (
    CommandOutcome,
    ExitCode,
    Message,
    MessageLevel,
    OperationKind,
    OperationResult,
)
from tfvc.models.config import CliConfig

# Resolvers and reconciliation
from tfvc.operations.option_sets import check_option_conflict, resolve_option_set
from tfvc.operations.items import resolve_items
from tfvc.operations.reconcile import ReconcilePolicy, ReconcileResult, reconcile

# Protocols
from tfvc.protocols import Prompter, QuestionResponse, Workspace, WorkspaceProvider

# Exceptions
from tfvc.exceptions import (
    ArgumentError,
    CommandNotFoundError,
    InvalidFreeArgumentCountError,
    InvalidOptionCombinationError,
    InvalidSpecError,
    ItemSpecParseError,
    MissingRequiredOptionError,
    OptionResolutionError,
    TfvcError,
    UnrecognizedOptionError,
    VersionSpecParseError,
    WildcardNotAllowedError,
    WorkspaceProviderError,
    WrongArgumentCountError,
)

__all__ = [
    "__version__",
    # Pipeline
    "CommandContext",
    "CommandRun",
    "Executor",
    "Invocation",
    "classify",
    "CommandDefinition",
    "CommandRegistry",
    "default_registry",
    # Options
    "AcceptedOptionSet",
    "GLOBAL_OPTION_KINDS",
    "LockLevel",
    "Option",
    "OptionKind",
    "OptionMap",
    # Items and versions
    "ItemSpec",
    "RecursionType",
    "LATEST",
    "ChangesetVersionSpec",
    "DateVersionSpec",
    "LabelVersionSpec",
    "LatestVersionSpec",
    "VersionSpec",
    "WorkspaceVersionSpec",
    "parse_version_spec",
    # Changes
    "CandidateChange",
    "ChangeType",
    "GetOptions",
    "PendingChange",
    "PendOptions",
    # Results and configuration
    "CommandOutcome",
    "ExitCode",
    "Message",
    "MessageLevel",
    "OperationKind",
    "OperationResult",
    "CliConfig",
    # Resolvers and reconciliation
    "check_option_conflict",
    "resolve_option_set",
    "resolve_items",
    "ReconcilePolicy",
    "ReconcileResult",
    "reconcile",
    # Protocols
    "Prompter",
    "QuestionResponse",
    "Workspace",
    "WorkspaceProvider",
    # Exceptions
    "ArgumentError",
    "CommandNotFoundError",
    "InvalidFreeArgumentCountError",
    "InvalidOptionCombinationError",
    "InvalidSpecError",
    "ItemSpecParseError",
    "MissingRequiredOptionError",
    "OptionResolutionError",
    "TfvcError",
    "UnrecognizedOptionError",
    "VersionSpecParseError",
    "WildcardNotAllowedError",
    "WorkspaceProviderError",
    "WrongArgumentCountError",
]
