"""offsync CLI entrypoint.

Command-line interface for triggering and observing synchronization runs.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import shlex
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from offsync.core.sync.coordinator import SyncCoordinator
    from offsync.domain.config import OffsyncConfig

from offsync.core.errors import (
    OffsyncCliError,
    project_not_found_error,
    sync_failed_error,
)
from offsync.domain.entities import SyncPhase, SyncState
from offsync.domain.exceptions import OffsyncDomainError
from offsync.shared.config_io import (
    CONFIG_FILE_NAME,
    OFFSYNC_DIR_NAME,
    find_offsync_dir,
    get_global_config_path,
)
from offsync.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    OffsyncCliError exceptions are re-raised to use their built-in
    formatting. Domain errors and invalid values are converted to
    OffsyncCliError; anything else gets a generic message, with a traceback
    in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except OffsyncCliError:
                raise
            except OffsyncDomainError as e:
                raise OffsyncCliError(e.message, hint=e.hint) from e
            except ValueError as e:
                raise OffsyncCliError(
                    str(e),
                    hint="Check your settings with 'offsync config show'",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise OffsyncCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _load_config(offsync_dir: Path | None) -> OffsyncConfig:
    """Load merged global and local configuration.

    Args:
        offsync_dir: Path to the project's .offsync directory, or None.

    Returns:
        OffsyncConfig with merged global and local settings.
    """
    from offsync.adapters.factory import ConfigFactory

    config_factory = ConfigFactory()
    return config_factory.create_config_provider().load(offsync_dir)


def _configure_logging(config: OffsyncConfig, verbose: bool) -> None:
    """Send offsync log records to stderr at the configured level.

    Args:
        config: Loaded configuration ([logging] level).
        verbose: Force DEBUG level.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("offsync").setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name="offsync")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging).",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """offsync - Trigger and observe data synchronization.

    Runs a sync provider through a coordinator that reports every state
    change: ready, syncing, synchronized or failed.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    offsync_dir = find_offsync_dir()
    config = _load_config(offsync_dir)
    ctx.obj["offsync_dir"] = offsync_dir
    ctx.obj["config"] = config
    _configure_logging(config, verbose)


async def _run_syncs(coordinator: SyncCoordinator, repeat: int) -> SyncState:
    """Run `repeat` syncs one after another and return the last settled state."""
    state = coordinator.current_state()
    for _ in range(repeat):
        state = await coordinator.run_sync()
    return state


@cli.command()
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=None,
    help="Simulated latency in seconds (overrides [sync] delay).",
)
@click.option(
    "--fail",
    "failure",
    type=str,
    default=None,
    help="Make the simulated sync fail with this error message.",
)
@click.option(
    "--command",
    type=str,
    default=None,
    help='Run this command as the sync, e.g. "git pull --ff-only".',
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Fail a sync that runs longer than this many seconds (0 disables).",
)
@click.option(
    "--repeat",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of sequential syncs to run.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print every published state as JSON.",
)
@click.pass_context
@handle_cli_errors("sync")
def sync(
    ctx: click.Context,
    delay: float | None,
    failure: str | None,
    command: str | None,
    timeout: float | None,
    repeat: int,
    json_output: bool,
) -> None:
    """Run a synchronization and report its progress.

    Uses the provider configured in [sync] unless --command is given.
    Exits with status 1 if the last sync failed.
    """
    from offsync.adapters.factory import SyncFactory, SyncOverrides
    from offsync.core.presentation import format_state_line, states_to_json
    from offsync.core.progress import spinner_context

    quiet = ctx.obj.get("quiet", False)
    overrides = SyncOverrides(
        delay=delay,
        failure=failure,
        command=shlex.split(command) if command else None,
        timeout=timeout,
    )
    factory = SyncFactory(ctx.obj["config"])

    with factory.create_coordinator(overrides) as coordinator:
        states = [coordinator.current_state()]
        coordinator.subscribe(states.append)

        if json_output:
            final = asyncio.run(_run_syncs(coordinator, repeat))
        else:
            color = sys.stdout.isatty()

            def echo_state(state: SyncState) -> None:
                if not quiet and state.phase is not SyncPhase.RUNNING:
                    click.echo(format_state_line(state, color=color))

            echo_state(states[0])
            coordinator.subscribe(echo_state)
            with spinner_context(quiet_mode=quiet) as spinner:
                if spinner:
                    coordinator.subscribe(spinner)
                final = asyncio.run(_run_syncs(coordinator, repeat))

    if json_output:
        click.echo(states_to_json(states))

    if final.phase is SyncPhase.FAILED:
        sync_failed_error(final.error_message)


# Configuration management commands
@cli.group()
def config() -> None:
    """Manage offsync configuration files.

    offsync uses a two-tier configuration system:
    - Local: .offsync/config.toml (project settings, found in parent directories)
    - Global: ~/.config/offsync/config.toml (user defaults)

    Local settings override global settings. Missing values use built-in defaults.
    """
    pass


def _local_config_path(ctx: click.Context) -> Path | None:
    """Get the local config path if inside a project, or None otherwise."""
    offsync_dir = ctx.obj.get("offsync_dir")
    if offsync_dir is None:
        return None
    return offsync_dir / CONFIG_FILE_NAME


def _display_path_status(path: Path, label: str) -> None:
    """Display a config path with its existence status."""
    status = "exists" if path.exists() else "not created"
    color = "green" if path.exists() else "yellow"
    click.echo(f"{label}{path}")
    click.echo(f"  Status: {click.style(status, fg=color)}")


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show configuration file locations and the effective settings."""
    import tomli_w

    from offsync.shared.config_io import config_to_data

    _display_path_status(get_global_config_path(), "Global config: ")
    local_path = _local_config_path(ctx)
    if local_path:
        _display_path_status(local_path, "Local config:  ")
    else:
        click.echo("Local config:  Not in an offsync project")

    click.echo("\nEffective configuration (merged global + local):")
    click.echo(tomli_w.dumps(config_to_data(ctx.obj["config"])).rstrip())


@config.command(name="path")
@click.option(
    "--global", "-g", "show_global", is_flag=True, help="Show only global config path"
)
@click.option(
    "--local", "-l", "show_local", is_flag=True, help="Show only local config path"
)
@click.pass_context
@handle_cli_errors("config path")
def config_path(ctx: click.Context, show_global: bool, show_local: bool) -> None:
    """Print config file path(s) for use in scripts.

    Outputs bare paths without any decoration, suitable for piping.
    """
    global_path = get_global_config_path()
    local_path = _local_config_path(ctx)

    if show_global:
        click.echo(global_path)
        return

    if show_local:
        # Outside a project: no output
        if local_path:
            click.echo(local_path)
        return

    click.echo(f"global:{global_path}")
    if local_path:
        click.echo(f"local:{local_path}")


@config.command(name="init")
@click.option(
    "--global", "-g", "init_global", is_flag=True, help="Create the global config file"
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file")
@handle_cli_errors("config init")
def config_init(init_global: bool, force: bool) -> None:
    """Create a commented config file with default settings.

    Creates .offsync/config.toml in the current directory by default.
    """
    from offsync.shared.config_io import create_default_config_file

    if init_global:
        path = get_global_config_path()
    else:
        path = Path.cwd() / OFFSYNC_DIR_NAME / CONFIG_FILE_NAME

    if path.exists() and not force:
        raise OffsyncCliError(
            f"Config already exists at {path}",
            hint="Use --force to overwrite it",
        )

    create_default_config_file(path)
    click.echo(f"✓ Created config at {path}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.option(
    "--global", "-g", "set_global", is_flag=True, help="Update the global config file"
)
@click.pass_context
@handle_cli_errors("config set")
def config_set(ctx: click.Context, key: str, value: str, set_global: bool) -> None:
    """Set KEY (section.name) to VALUE in a config file.

    VALUE is read as a TOML literal when possible, e.g. 2.5, true or
    '["git", "pull"]'; otherwise it is stored as a string.
    """
    from offsync.shared.config_io import set_config_value

    if set_global:
        path = get_global_config_path()
    else:
        path = _local_config_path(ctx)
        if path is None:
            project_not_found_error()

    set_config_value(path, key, value)
    click.echo(f"✓ Set {key} = {value} in {path}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
