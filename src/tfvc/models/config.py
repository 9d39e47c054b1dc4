"""Configuration models for tfvc.

CliConfig holds per-process settings gathered by the CLI from its global
options and environment variables.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, field_validator

from tfvc.exceptions import WorkspaceProviderError

if TYPE_CHECKING:
    from tfvc.protocols import WorkspaceProvider

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CliConfig(BaseModel):
    """Per-process configuration."""

    no_prompt: bool = False
    log_level: str = "WARNING"
    workspace_provider: Optional[str] = None  # "module:callable"
    cwd: Optional[str] = None  # None = process working directory

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.upper()
            if v not in _LOG_LEVELS:
                raise ValueError(f"unknown log level: {v}")
        return v

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def load_workspace_provider(self) -> WorkspaceProvider:
        """Import the configured ``module:callable`` workspace provider.

        Raises:
            WorkspaceProviderError: If none is configured or it cannot be
                imported.
        """
        if not self.workspace_provider:
            raise WorkspaceProviderError(
                "No workspace provider configured. "
                "Use --workspace-provider or set TFVC_WORKSPACE_PROVIDER."
            )
        module_name, sep, attr = self.workspace_provider.partition(":")
        if not sep or not module_name or not attr:
            raise WorkspaceProviderError(
                f"Workspace provider must look like 'module:callable', "
                f"got '{self.workspace_provider}'"
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise WorkspaceProviderError(
                f"Cannot import workspace provider module '{module_name}': {e}"
            ) from e
        provider = getattr(module, attr, None)
        if provider is None or not callable(provider):
            raise WorkspaceProviderError(
                f"'{attr}' in '{module_name}' is not a callable workspace provider"
            )
        return provider
