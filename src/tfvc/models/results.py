"""Result models: exit codes, operation results and command outcomes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class ExitCode(enum.IntEnum):
    """Process exit status of one command."""

    SUCCESS = 0
    PARTIAL_SUCCESS = 1
    UNRECOGNIZED_COMMAND = 2
    FAILURE = 100

    @staticmethod
    def compose(current: Optional[ExitCode], new: ExitCode) -> ExitCode:
        """Fold a new exit code into the one already set.

        An unset code takes the new one; a numerically greater code wins;
        any other difference collapses to PARTIAL_SUCCESS.
        """
        if current is None or new > current:
            return new
        if new != current:
            return ExitCode.PARTIAL_SUCCESS
        return current


class OperationKind(str, enum.Enum):
    """Which workspace capability a command invoked, and why."""

    ADD = "add"
    DETECT_ADD = "detect-add"
    DELETE = "delete"
    DETECT_DELETE = "detect-delete"
    CHECKOUT = "checkout"
    LOCK = "lock"
    RENAME = "rename"
    UNDELETE = "undelete"
    UNDO = "undo"
    UNDO_UNCHANGED = "undo-unchanged"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one workspace batch call.

    Attributes:
        kind: The operation that was invoked.
        count: Number of items the workspace reports as affected.
        targets: What was passed to the workspace, for messages.
    """

    kind: OperationKind
    count: int
    targets: tuple[str, ...] = ()

    @property
    def affected(self) -> bool:
        return self.count > 0


class MessageLevel(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    level: MessageLevel
    text: str


@dataclass
class CommandOutcome:
    """Everything the reporting boundary needs to render one command.

    Attributes:
        command: Canonical name of the command, or the raw name when unknown.
        exit_code: Classified process exit status.
        messages: Informational, warning and error lines in order.
        result: The operation result, when a workspace call was made.
        error: The exception that aborted the command, if any.
    """

    command: str
    exit_code: ExitCode = ExitCode.SUCCESS
    messages: list[Message] = field(default_factory=list)
    result: Optional[OperationResult] = None
    error: Optional[BaseException] = None

    def info(self, text: str) -> None:
        self.messages.append(Message(MessageLevel.INFO, text))

    def warning(self, text: str) -> None:
        self.messages.append(Message(MessageLevel.WARNING, text))

    def fail(self, text: str, exit_code: ExitCode = ExitCode.FAILURE) -> None:
        self.messages.append(Message(MessageLevel.ERROR, text))
        self.exit_code = ExitCode.compose(self.exit_code, exit_code)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS
