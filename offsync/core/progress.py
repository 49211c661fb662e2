"""Progress reporting utilities for CLI commands.

Provides a Rich spinner that follows the coordinator's published states.
"""

from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from offsync.domain.entities import SyncState


class SyncSpinnerObserver:
    """Sync observer that shows a spinner while a sync is running.

    Subscribe an instance to a SyncCoordinator; the spinner task is added on
    RUNNING and removed on any other state.
    """

    def __init__(self, progress: Progress, description: str = "Syncing...") -> None:
        """Initialize with a Rich Progress instance.

        Args:
            progress: Rich Progress instance to use for display.
            description: Text shown next to the spinner.
        """
        self.progress = progress
        self.description = description
        self.task_id: int | None = None

    def __call__(self, state: SyncState) -> None:
        if state.is_running:
            if self.task_id is None:
                self.task_id = self.progress.add_task(self.description, total=None)
        elif self.task_id is not None:
            self.progress.remove_task(self.task_id)
            self.task_id = None


@contextmanager
def spinner_context(
    quiet_mode: bool = False,
) -> Generator[SyncSpinnerObserver | None, None, None]:
    """Context manager for creating the sync spinner.

    Args:
        quiet_mode: If True, returns None (no progress reporting).

    Yields:
        SyncSpinnerObserver if not quiet, None otherwise.

    Example:
        with spinner_context(quiet_mode=False) as spinner:
            if spinner:
                coordinator.subscribe(spinner)
            asyncio.run(...)
    """
    if quiet_mode:
        yield None
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=Console(stderr=True),
            transient=True,
        ) as progress:
            yield SyncSpinnerObserver(progress)
