"""Registered tfvc commands.

Importing this package registers the built-in version-control commands
on ``default_registry``.
"""

from tfvc.commands.registry import CommandDefinition, CommandRegistry, default_registry
from tfvc.commands import vc  # noqa: F401  (registers commands)

__all__ = ["CommandDefinition", "CommandRegistry", "default_registry"]
