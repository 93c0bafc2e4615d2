"""progress bar for multi-file formatting runs."""

import sys
from contextlib import contextmanager
from typing import Optional
from rich.console import Console
from rich.progress import (
    Progress,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TaskID,
)


class ProgressManager:
    """shows one bar step per file, only on an interactive terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        # piped output and ci runs get no bar
        self._enabled = sys.stdout.isatty() and not sys.stdout.closed

    @contextmanager
    def task_progress(self, description: str, total: int):
        """yields (progress, task_id); progress only needs advance()."""
        if not self._enabled or total < 2:
            yield _DummyProgress(), None
            return

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(description, total=total)
            yield progress, task_id


class _DummyProgress:
    def advance(self, task_id: Optional[TaskID], advance: float = 1):
        pass
