"""Configuration I/O utilities for reading and writing TOML config files.

This module handles locating config files and serialization of OffsyncConfig
to/from TOML format.
"""

import os
import platform
import shlex
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from offsync.domain.config import OffsyncConfig

OFFSYNC_DIR_NAME = ".offsync"
CONFIG_FILE_NAME = "config.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/offsync/config.toml or ~/.config/offsync/config.toml
    - Windows: %APPDATA%/offsync/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "offsync" / CONFIG_FILE_NAME
        return Path.home() / ".config" / "offsync" / CONFIG_FILE_NAME
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "offsync" / CONFIG_FILE_NAME
        return Path.home() / ".config" / "offsync" / CONFIG_FILE_NAME


def find_offsync_dir(start: Path | None = None) -> Path | None:
    """Find the nearest .offsync directory.

    Walks up from `start` (default: current directory) to the filesystem root.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the .offsync directory, or None if there is none.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / OFFSYNC_DIR_NAME
        if candidate.is_dir():
            return candidate
    return None


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def load_config(path: Path) -> OffsyncConfig:
    """Load configuration from a single TOML file over built-in defaults.

    Args:
        path: Path to config.toml file

    Returns:
        Parsed OffsyncConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or has invalid values
    """
    data = load_config_data(path)
    return OffsyncConfig.from_partial(OffsyncConfig.default(), data)


def config_to_data(config: OffsyncConfig) -> dict[str, Any]:
    """Convert an OffsyncConfig to a TOML-serializable dictionary."""
    return {
        "sync": {
            "provider": config.sync.provider,
            "delay": config.sync.delay,
            "command": list(config.sync.command),
            "timeout": config.sync.timeout,
        },
        "logging": {
            "level": config.logging.level,
        },
    }


def parse_config_value(raw: str) -> Any:
    """Parse a value given on the command line.

    TOML literals (numbers, booleans, arrays, quoted strings) are parsed as
    such; anything else is kept as a bare string.

    Example:
        parse_config_value("2.5")              # -> 2.5
        parse_config_value('["git", "pull"]')  # -> ["git", "pull"]
        parse_config_value("command")          # -> "command"
    """
    try:
        return tomllib.loads(f"value = {raw}")["value"]
    except tomllib.TOMLDecodeError:
        return raw


def set_config_value(path: Path, key: str, raw_value: str) -> OffsyncConfig:
    """Set one `section.key` value in a config file.

    Other values already in the file are preserved. The result is validated
    before anything is written. A bare string for sync.command is split into
    arguments the way a shell would.

    Args:
        path: Config file to update (created if missing)
        key: Dotted key, e.g. "sync.timeout"
        raw_value: Value as typed by the user

    Returns:
        The effective config of the file after the update (over defaults)

    Raises:
        ValueError: If the key is malformed or the resulting config is invalid
    """
    section, _, name = key.partition(".")
    if not section or not name or "." in name:
        raise ValueError(f"Config key must look like 'section.key', got {key!r}")

    data = load_config_data(path) if path.exists() else {}
    table = data.setdefault(section, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{section}] must be a table")
    value = parse_config_value(raw_value)
    if (section, name) == ("sync", "command") and isinstance(value, str):
        value = shlex.split(value)
    table[name] = value

    config = OffsyncConfig.from_partial(OffsyncConfig.default(), data)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)
    return config


def create_default_config_file(path: Path) -> None:
    """Create a default config.toml file with sensible defaults and comments.

    Args:
        path: Destination path for config.toml
    """
    # Template string keeps the comments
    template = """\
# offsync configuration
# Created by: offsync config init

[sync]
# Provider that performs the sync:
#   "simulated" waits for `delay` seconds (useful for demos)
#   "command"   runs `command` and fails on a non-zero exit code
provider = "simulated"

# Simulated latency in seconds
delay = 2.0

# Command to run for the "command" provider, e.g. ["rsync", "-a", "data/", "backup/"]
command = []

# Fail a sync that runs longer than this many seconds (0 disables)
timeout = 0.0

[logging]
# Minimum log level: DEBUG, INFO, WARNING, ERROR
level = "WARNING"
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(template)
