"""Factory classes for coordinator and adapter instantiation.

This module centralizes the creation of the sync coordinator and its provider,
keeping the CLI layer free from direct adapter imports. The coordinator
receives everything through its constructor; nothing is looked up from
ambient state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from offsync.core.sync.coordinator import SyncCoordinator
    from offsync.domain.config import OffsyncConfig
    from offsync.ports.config import ConfigProvider
    from offsync.ports.sync import SyncOperationProvider


class ConfigFactory:
    """Factory for creating config provider instances."""

    def create_config_provider(self) -> ConfigProvider:
        from offsync.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


@dataclass(frozen=True)
class SyncOverrides:
    """Per-invocation overrides of the [sync] config section.

    Attributes:
        delay: Simulated latency in seconds.
        failure: Make the simulated provider fail with this message.
        command: Run this command instead of the configured provider.
        timeout: Timeout in seconds (0 disables).
    """

    delay: float | None = None
    failure: str | None = None
    command: list[str] | None = None
    timeout: float | None = None


class SyncFactory:
    """Factory for the sync provider and coordinator.

    Args:
        config: OffsyncConfig with [sync] settings.
    """

    def __init__(self, config: OffsyncConfig) -> None:
        self._config = config

    def create_provider(
        self, overrides: SyncOverrides | None = None
    ) -> SyncOperationProvider:
        """Create the sync provider selected by config and overrides.

        A command override always selects the command provider.

        Returns:
            SyncOperationProvider instance.

        Raises:
            ValueError: If a simulated failure is requested together with the
                command provider, or a value is invalid.
        """
        from offsync.adapters.providers import (
            CommandSyncProvider,
            SimulatedSyncProvider,
        )

        overrides = overrides or SyncOverrides()
        sync_config = self._config.sync

        command = overrides.command
        if command is None and sync_config.provider == "command":
            command = sync_config.command

        if command:
            if overrides.failure:
                raise ValueError("A simulated failure requires the simulated provider")
            return CommandSyncProvider(command)

        delay = overrides.delay if overrides.delay is not None else sync_config.delay
        return SimulatedSyncProvider(delay=delay, failure=overrides.failure)

    def create_coordinator(
        self, overrides: SyncOverrides | None = None
    ) -> SyncCoordinator:
        """Create a coordinator wired to the configured provider.

        Returns:
            SyncCoordinator in its initial state.
        """
        from offsync.core.sync.coordinator import SyncCoordinator

        overrides = overrides or SyncOverrides()
        if overrides.timeout is not None:
            timeout = overrides.timeout if overrides.timeout > 0 else None
        else:
            timeout = self._config.sync.effective_timeout

        return SyncCoordinator(self.create_provider(overrides), timeout=timeout)
