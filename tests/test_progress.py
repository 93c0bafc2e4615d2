"""test suite for progress manager."""
import pytest
from pathlib import Path
import sys
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulafmt.ui.progress import ProgressManager, _DummyProgress


class TestProgressManager:
    """test progress manager functionality."""

    def test_initialization_default(self):
        """test progress manager initializes with default console."""
        pm = ProgressManager()
        assert pm.console is not None

    def test_initialization_custom_console(self):
        """test progress manager accepts custom console."""
        from rich.console import Console
        custom_console = Console()
        pm = ProgressManager(console=custom_console)
        assert pm.console is custom_console

    def test_tty_detection_interactive(self):
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager()
            assert pm._enabled is True

    def test_tty_detection_non_interactive(self):
        with patch('sys.stdout.isatty', return_value=False):
            pm = ProgressManager()
            assert pm._enabled is False

    def test_task_progress_non_interactive(self):
        with patch('sys.stdout.isatty', return_value=False):
            pm = ProgressManager()
            with pm.task_progress("Formatting", total=3) as (progress, task_id):
                assert isinstance(progress, _DummyProgress)
                assert task_id is None
                progress.advance(task_id)

    def test_task_progress_single_item_is_quiet(self):
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager()
            with pm.task_progress("Formatting", total=1) as (progress, task_id):
                assert isinstance(progress, _DummyProgress)

    def test_task_progress_interactive(self):
        from rich.console import Console
        from rich.progress import Progress
        from io import StringIO
        with patch('sys.stdout.isatty', return_value=True):
            pm = ProgressManager(console=Console(file=StringIO()))
            with pm.task_progress("Formatting", total=2) as (progress, task_id):
                assert isinstance(progress, Progress)
                assert task_id is not None
                progress.advance(task_id)


class TestDummyProgress:
    def test_advance_is_a_no_op(self):
        progress = _DummyProgress()
        progress.advance(None)
        progress.advance(None, advance=2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
