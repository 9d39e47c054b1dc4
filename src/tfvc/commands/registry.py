"""Command registry.

A closed mapping from command names and aliases to CommandDefinitions.
New verbs are added by registration, not by subclassing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional, Union

from tfvc.exceptions import CommandNotFoundError
from tfvc.models.options import AcceptedOptionSet

if TYPE_CHECKING:
    from tfvc.commands.executor import CommandRun
    from tfvc.models.results import OperationResult
    from tfvc.operations.reconcile import ReconcileResult

    RunFunction = Callable[[CommandRun], Union[OperationResult, ReconcileResult]]


@dataclass(frozen=True)
class CommandDefinition:
    """Everything the executor needs to know about one verb.

    Attributes:
        name: Canonical command name.
        option_sets: Accepted usage shapes, tried in order.
        run: Resolves items, optionally reconciles, and invokes exactly one
            workspace batch capability.
        aliases: Alternative names.
        help: One-paragraph description for the CLI.
    """

    name: str
    option_sets: tuple[AcceptedOptionSet, ...]
    run: RunFunction
    aliases: tuple[str, ...] = ()
    help: str = ""

    def __post_init__(self) -> None:
        if not self.option_sets:
            raise ValueError(f"command '{self.name}' must declare at least one option set")

    @property
    def usages(self) -> list[str]:
        return [s.usage for s in self.option_sets if s.usage]


@dataclass
class CommandRegistry:
    """Registered commands, in registration order."""

    _commands: dict[str, CommandDefinition] = field(default_factory=dict)
    _lookup: dict[str, str] = field(default_factory=dict)

    def register(self, definition: CommandDefinition) -> CommandDefinition:
        names = (definition.name, *definition.aliases)
        for name in names:
            if name.lower() in self._lookup:
                raise ValueError(f"command name already registered: {name}")
        self._commands[definition.name] = definition
        for name in names:
            self._lookup[name.lower()] = definition.name
        return definition

    def command(
        self,
        name: str,
        *,
        option_sets: Iterable[AcceptedOptionSet],
        aliases: Iterable[str] = (),
        help: Optional[str] = None,
    ) -> Callable[[RunFunction], RunFunction]:
        """Decorator registering a run function as a command."""

        def decorator(fn: RunFunction) -> RunFunction:
            self.register(
                CommandDefinition(
                    name=name,
                    option_sets=tuple(option_sets),
                    run=fn,
                    aliases=tuple(aliases),
                    help=help if help is not None else (fn.__doc__ or "").strip(),
                )
            )
            return fn

        return decorator

    def get(self, name: str) -> CommandDefinition:
        """Look up a command by name or alias, case-insensitively.

        Raises:
            CommandNotFoundError: If nothing matches.
        """
        canonical = self._lookup.get(name.lower())
        if canonical is None:
            raise CommandNotFoundError(name)
        return self._commands[canonical]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._lookup

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


default_registry = CommandRegistry()
