"""Domain exceptions for offsync.

These exceptions represent sync failures and misuse of the coordinator.
Provider failures are converted to a FAILED state by the coordinator; the
remaining errors are caught at the application boundary (CLI) and turned into
user-facing messages.
"""


class OffsyncDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class SyncFailure(OffsyncDomainError):
    """Raised by a sync provider when the data exchange fails."""

    pass


class SyncTimeoutError(SyncFailure):
    """Raised when a provider does not finish within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(
            f"Sync timed out after {timeout:g}s",
            hint="Increase [sync] timeout or check the sync provider",
        )
        self.timeout = timeout


class CoordinatorDisposedError(OffsyncDomainError):
    """Raised when a disposed coordinator is asked to do more work."""

    def __init__(self) -> None:
        super().__init__("Sync coordinator has been disposed")
