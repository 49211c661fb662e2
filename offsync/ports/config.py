"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from offsync.domain.config import OffsyncConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, offsync_dir: Path | None) -> OffsyncConfig:
        """Load configuration.

        Args:
            offsync_dir: Path to the project's .offsync directory, or None
                when running outside a project (global config only).

        Returns:
            OffsyncConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
