"""Unit tests for the sync provider adapters."""

import asyncio
import sys
import time
from pathlib import Path

import pytest

from offsync.adapters.providers import (
    CallableSyncProvider,
    CommandSyncProvider,
    SimulatedSyncProvider,
)
from offsync.core.sync import SyncCoordinator
from offsync.domain.entities import SyncPhase
from offsync.domain.exceptions import SyncFailure


class TestSimulatedSyncProvider:
    """Tests for SimulatedSyncProvider."""

    def test_completes_after_delay(self) -> None:
        provider = SimulatedSyncProvider(delay=0.02)

        start = time.monotonic()
        asyncio.run(provider.perform_sync())

        assert time.monotonic() - start >= 0.015

    def test_default_delay_matches_simulated_latency(self) -> None:
        assert SimulatedSyncProvider().delay == 2.0

    def test_configured_failure_raises(self) -> None:
        provider = SimulatedSyncProvider(delay=0, failure="network unreachable")

        with pytest.raises(SyncFailure, match="network unreachable"):
            asyncio.run(provider.perform_sync())

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError, match="delay cannot be negative"):
            SimulatedSyncProvider(delay=-1)


class TestCallableSyncProvider:
    """Tests for CallableSyncProvider."""

    def test_calls_plain_function(self) -> None:
        calls = []
        provider = CallableSyncProvider(lambda: calls.append("synced"))

        asyncio.run(provider.perform_sync())

        assert calls == ["synced"]

    def test_awaits_coroutine_function(self) -> None:
        calls = []

        async def use_case() -> None:
            await asyncio.sleep(0)
            calls.append("synced")

        asyncio.run(CallableSyncProvider(use_case).perform_sync())

        assert calls == ["synced"]

    def test_propagates_errors(self) -> None:
        def use_case() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(CallableSyncProvider(use_case).perform_sync())

    def test_drives_coordinator_to_failed(self) -> None:
        """Errors from the injected callable surface as a FAILED state."""

        async def use_case() -> None:
            raise RuntimeError("boom")

        coordinator = SyncCoordinator(CallableSyncProvider(use_case))

        final = asyncio.run(coordinator.run_sync())

        assert final.phase is SyncPhase.FAILED
        assert final.error_message == "boom"


class TestCommandSyncProvider:
    """Tests for CommandSyncProvider, using the running Python as the command."""

    def test_zero_exit_succeeds(self) -> None:
        provider = CommandSyncProvider([sys.executable, "-c", "pass"])
        asyncio.run(provider.perform_sync())

    def test_non_zero_exit_fails_with_stderr(self) -> None:
        script = "import sys; sys.stderr.write('remote rejected push'); sys.exit(3)"
        provider = CommandSyncProvider([sys.executable, "-c", script])

        with pytest.raises(SyncFailure) as exc_info:
            asyncio.run(provider.perform_sync())

        assert exc_info.value.message == (
            "Sync command failed (exit code 3): remote rejected push"
        )

    def test_non_zero_exit_without_stderr(self) -> None:
        provider = CommandSyncProvider([sys.executable, "-c", "raise SystemExit(2)"])

        with pytest.raises(SyncFailure, match=r"^Sync command failed \(exit code 2\)$"):
            asyncio.run(provider.perform_sync())

    def test_missing_executable_fails(self, tmp_path: Path) -> None:
        missing = str(tmp_path / "no-such-sync-tool")
        provider = CommandSyncProvider([missing])

        with pytest.raises(SyncFailure, match="Sync command not found"):
            asyncio.run(provider.perform_sync())

    def test_runs_in_given_directory(self, tmp_path: Path) -> None:
        script = "import pathlib; pathlib.Path('marker').write_text('ok')"
        provider = CommandSyncProvider([sys.executable, "-c", script], cwd=tmp_path)

        asyncio.run(provider.perform_sync())

        assert (tmp_path / "marker").read_text() == "ok"

    def test_timeout_kills_command(self) -> None:
        """A coordinator timeout stops a hanging command."""
        provider = CommandSyncProvider([sys.executable, "-c", "import time; time.sleep(30)"])
        coordinator = SyncCoordinator(provider, timeout=0.5)

        start = time.monotonic()
        final = asyncio.run(coordinator.run_sync())

        assert final.phase is SyncPhase.FAILED
        assert "timed out" in final.error_message
        assert time.monotonic() - start < 10

    def test_empty_argv_rejected(self) -> None:
        with pytest.raises(ValueError, match="argv must contain"):
            CommandSyncProvider([])
