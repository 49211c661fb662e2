"""Sync provider that runs an external command (rsync, git pull, ...)."""

import asyncio
import logging
from pathlib import Path

from offsync.domain.exceptions import SyncFailure

logger = logging.getLogger(__name__)


class CommandSyncProvider:
    """Sync provider that runs a subprocess and checks its exit code.

    The command succeeds when it exits with code 0. If the sync is cancelled
    (timeout or coordinator disposal) the child process is killed.

    Args:
        argv: Command and arguments, e.g. ["rsync", "-a", "src/", "dst/"].
        cwd: Working directory for the command (default: current directory).

    Raises:
        ValueError: If argv is empty.
    """

    def __init__(self, argv: list[str], cwd: Path | None = None) -> None:
        if not argv:
            raise ValueError("argv must contain at least the command name")
        self.argv = list(argv)
        self.cwd = cwd

    async def perform_sync(self) -> None:
        """Run the command to completion.

        Raises:
            SyncFailure: If the command is missing or exits non-zero.
        """
        logger.debug("Running sync command: %s", self.argv)
        try:
            process = await asyncio.create_subprocess_exec(
                *self.argv,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise SyncFailure(
                f"Sync command not found: {self.argv[0]}",
                hint="Check [sync] command in your config",
            ) from e

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

        if process.returncode != 0:
            raise SyncFailure(self._format_failure(process.returncode, stderr))

    def _format_failure(self, returncode: int, stderr: bytes | None) -> str:
        """Format a failed run with exit code and stderr."""
        message = f"Sync command failed (exit code {returncode})"
        text = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
        if text:
            message += f": {text}"
        return message
