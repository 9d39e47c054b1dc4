"""Console confirmation prompts."""

from __future__ import annotations

from typing import Optional

import click
from rich.console import Console

from tfvc.protocols import QuestionResponse


class ConsolePrompter:
    """Asks yes/no questions on the terminal.

    End of input counts as "no".
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console

    def ask(self, question: str) -> QuestionResponse:
        if self.console is not None:
            self.console.file.flush()
        try:
            confirmed = click.confirm(question, default=False)
        except click.Abort:
            return QuestionResponse.NO
        return QuestionResponse.YES if confirmed else QuestionResponse.NO
