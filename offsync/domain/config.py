"""Config domain models for offsync.

Configuration is stored in .offsync/config.toml (project) and
~/.config/offsync/config.toml (user). This module defines the domain models
that represent validated configuration state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class SyncConfig:
    """Configuration for the sync provider and coordinator.

    Attributes:
        provider: Which provider performs the sync - "simulated" waits for
                  `delay` seconds, "command" runs `command` as a subprocess
        delay: Simulated latency in seconds (default: 2.0)
        command: Argument vector for the command provider
        timeout: Seconds before a running sync is failed (0 disables)

    Raises:
        ValueError: If delay or timeout is negative, command is not a list of
                   strings, or provider is "command" without a command.
    """

    provider: Literal["simulated", "command"] = "simulated"
    delay: float = 2.0
    command: list[str] = field(default_factory=list)
    timeout: float = 0.0

    def __post_init__(self) -> None:
        """Validate sync config after initialization."""
        if self.provider not in ("simulated", "command"):
            raise ValueError(
                f"provider must be 'simulated' or 'command', got {self.provider!r}"
            )
        if self.delay < 0:
            raise ValueError(f"delay cannot be negative, got {self.delay}")
        if self.timeout < 0:
            raise ValueError(f"timeout cannot be negative, got {self.timeout}")
        if not isinstance(self.command, list) or not all(
            isinstance(arg, str) for arg in self.command
        ):
            raise ValueError(
                f"command must be a list of strings, got {self.command!r}"
            )
        if self.provider == "command" and not self.command:
            raise ValueError("command is required when provider is 'command'")

    @property
    def effective_timeout(self) -> float | None:
        """Timeout in seconds, or None when disabled."""
        return self.timeout if self.timeout > 0 else None


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        level: Minimum level for offsync loggers (default: WARNING)

    Raises:
        ValueError: If level is not a known level name.
    """

    level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate logging config after initialization."""
        if not isinstance(self.level, str) or self.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"level must be one of {', '.join(LOG_LEVELS)}, got {self.level!r}"
            )


@dataclass(frozen=True)
class OffsyncConfig:
    """Complete offsync configuration.

    Attributes:
        sync: Sync provider and coordinator configuration
        logging: Log output configuration
    """

    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def default() -> OffsyncConfig:
        """Create a config with all default values."""
        return OffsyncConfig(sync=SyncConfig(), logging=LoggingConfig())

    @staticmethod
    def from_partial(base: OffsyncConfig, data: dict[str, Any]) -> OffsyncConfig:
        """Overlay raw config data onto an existing config.

        Keys missing from `data` keep their value from `base`. Each section is
        rebuilt through its dataclass so validation runs at every merge step.

        Args:
            base: Config providing the values not present in data
            data: Parsed TOML data keyed by section name

        Returns:
            New OffsyncConfig with the overrides applied

        Raises:
            ValueError: If data has an unknown section, a section is not a
                       table or contains unknown keys, or the merged values
                       fail validation.
        """
        section_names = {f.name for f in fields(base)}
        unknown_sections = set(data) - section_names
        if unknown_sections:
            raise ValueError(
                f"Unknown config sections: {', '.join(sorted(unknown_sections))}"
            )

        sections = {}
        for section in fields(base):
            current = getattr(base, section.name)
            overrides = data.get(section.name, {})
            if not isinstance(overrides, dict):
                raise ValueError(f"[{section.name}] must be a table")
            known = {f.name for f in fields(current)}
            unknown = set(overrides) - known
            if unknown:
                raise ValueError(
                    f"Unknown keys in [{section.name}]: {', '.join(sorted(unknown))}"
                )
            try:
                sections[section.name] = replace(current, **overrides)
            except TypeError as e:
                raise ValueError(f"Invalid value in [{section.name}]: {e}") from e
        return OffsyncConfig(**sections)
