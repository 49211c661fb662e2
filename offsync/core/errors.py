"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all offsync CLI commands.
"""

from typing import NoReturn

import click


class OffsyncCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise OffsyncCliError(
            "Sync failed: connection refused",
            hint="Check the sync provider and run 'offsync sync' again",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize the error with message and optional hint.

        Args:
            message: The primary error message.
            hint: Optional actionable suggestion for the user.
        """
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def project_not_found_error() -> NoReturn:
    """Raise error when no .offsync directory exists.

    Raises:
        OffsyncCliError: Always raises with initialization hint.
    """
    raise OffsyncCliError(
        "Not in an offsync project",
        hint="Run 'offsync config init' to create .offsync/config.toml, "
        "or pass --global",
    )


def sync_failed_error(message: str | None) -> NoReturn:
    """Raise error when the final sync state is FAILED.

    Args:
        message: The error_message of the failed state.

    Raises:
        OffsyncCliError: Always raises with retry hint.
    """
    raise OffsyncCliError(
        f"Sync failed: {message}",
        hint="Fix the problem and run 'offsync sync' again; failed syncs are not retried",
    )
