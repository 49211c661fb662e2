"""TOML-based configuration provider.

Loads configuration from .offsync/config.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: .offsync/config.toml (project-specific)
2. Global: ~/.config/offsync/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from offsync.domain.config import OffsyncConfig
from offsync.shared.config_io import (
    CONFIG_FILE_NAME,
    get_global_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config (~/.config/offsync/config.toml) if present
    2. Load local config (.offsync/config.toml) if present
    3. Local values override global values (key-level merge per section)
    4. Missing values fall back to built-in defaults

    Gracefully handles missing or invalid configs with warnings.
    """

    def load(self, offsync_dir: Path | None) -> OffsyncConfig:
        """Load configuration with global fallback.

        Uses OffsyncConfig.from_partial so validation happens at each
        merge step.

        Args:
            offsync_dir: Path to .offsync directory containing config.toml,
                or None to use only global config and defaults

        Returns:
            OffsyncConfig instance with merged global/local values or defaults
        """
        global_path = get_global_config_path()

        config = OffsyncConfig.default()

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config = OffsyncConfig.from_partial(config, global_data)
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if offsync_dir is None:
            return config

        local_path = offsync_dir / CONFIG_FILE_NAME
        if local_path.exists():
            try:
                local_data = load_config_data(local_path)
                config = OffsyncConfig.from_partial(config, local_data)
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError) as e:
                logger.warning(
                    "Failed to parse config.toml: %s. Using global/default configuration.",
                    e,
                )

        return config
