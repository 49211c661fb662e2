"""Sync error description and logging.

The coordinator never lets a provider failure escape. Whatever the provider
raises is turned into the error_message of a FAILED state using
describe_sync_error, and reported once through log_sync_error.
"""

import logging

from offsync.domain.exceptions import OffsyncDomainError

logger = logging.getLogger(__name__)


def describe_sync_error(exception: Exception) -> str:
    """Format an exception into a user-facing error message.

    - OffsyncDomainError: Uses the error's message directly
    - Other exceptions: Uses str(exception), falling back to the exception
      type name when the exception carries no message

    Args:
        exception: The exception raised by the sync provider.

    Returns:
        Non-empty error message string.

    Example:
        describe_sync_error(RuntimeError("boom"))  # -> "boom"
        describe_sync_error(ConnectionResetError())  # -> "ConnectionResetError during sync"
    """
    if isinstance(exception, OffsyncDomainError):
        message = exception.message
    else:
        message = str(exception)
    message = message.strip()
    if message:
        return message
    return f"{type(exception).__name__} during sync"


def log_sync_error(exception: Exception) -> None:
    """Log a provider failure with appropriate severity.

    - OffsyncDomainError: WARNING level (expected failure reported by the provider)
    - OSError: ERROR level
    - Other exceptions: ERROR level with traceback

    Args:
        exception: The exception raised by the sync provider.
    """
    if isinstance(exception, OffsyncDomainError):
        logger.warning("Sync failed: %s", exception.message)
    elif isinstance(exception, OSError):
        logger.error("I/O error during sync: %s", exception)
    else:
        logger.error("Unexpected error during sync", exc_info=exception)
