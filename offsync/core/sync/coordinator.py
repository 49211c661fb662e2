"""Sync coordinator: the state machine that drives one sync provider.

The coordinator serializes sync requests, publishes every state transition to
its subscribers, and records the time of the last successful sync.

State machine:
    IDLE ──request──▶ RUNNING ──ok──▶ SUCCEEDED
                         │                │
                         └──error──▶ FAILED
    SUCCEEDED/FAILED ──request──▶ RUNNING
    RUNNING ──request──▶ (dropped)
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime

from offsync.core.sync.errors import describe_sync_error, log_sync_error
from offsync.domain.entities import SyncState
from offsync.domain.exceptions import CoordinatorDisposedError, SyncTimeoutError
from offsync.ports.sync import SyncObserver, SyncOperationProvider

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Subscription:
    """Handle returned by SyncCoordinator.subscribe().

    Cancelling stops further delivery to the observer. Cancelling twice is a
    no-op.
    """

    def __init__(self, coordinator: SyncCoordinator, observer: SyncObserver) -> None:
        self._coordinator = coordinator
        self._observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivering states to the observer."""
        if not self._active:
            return
        self._active = False
        self._coordinator._remove_subscription(self)

    def _deliver(self, state: SyncState) -> None:
        if not self._active:
            return
        try:
            self._observer(state)
        except Exception:
            # Remaining observers still receive the state
            logger.exception("Sync observer %r raised", self._observer)


class SyncCoordinator:
    """Serializes sync requests and publishes the resulting states.

    At most one provider call is in flight at a time. Provider failures are
    never raised to the caller; they become a FAILED state carrying a
    human-readable error_message.

    The coordinator is not thread-safe. All methods must be called from the
    thread running the event loop that executes the sync; the running-phase
    guard relies on that.

    Args:
        provider: Performs the actual data exchange.
        timeout: Seconds a provider call may take before the coordinator
            cancels it and publishes FAILED. None or 0 disables the timeout.
        clock: Returns the current timezone-aware time. Defaults to UTC now.

    Raises:
        ValueError: If timeout is negative.

    Example:
        coordinator = SyncCoordinator(SimulatedSyncProvider(delay=0.1))
        coordinator.subscribe(print)
        final_state = await coordinator.run_sync()
        coordinator.dispose()
    """

    def __init__(
        self,
        provider: SyncOperationProvider,
        *,
        timeout: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout cannot be negative, got {timeout}")
        if timeout == 0:
            timeout = None
        self._provider = provider
        self._timeout = timeout
        self._clock = clock or _utc_now
        self._state = SyncState.initial()
        self._subscriptions: list[Subscription] = []
        self._pending: deque[SyncState] = deque()
        self._publishing = False
        self._task: asyncio.Task[SyncState] | None = None
        self._disposed = False

    def __enter__(self) -> SyncCoordinator:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def current_state(self) -> SyncState:
        """Return the latest published state."""
        return self._state

    def subscribe(self, observer: SyncObserver) -> Subscription:
        """Register an observer for every subsequent state.

        Args:
            observer: Called synchronously with each published SyncState.

        Returns:
            Subscription whose cancel() stops delivery.

        Raises:
            CoordinatorDisposedError: If the coordinator has been disposed.
        """
        self._ensure_not_disposed()
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        return subscription

    def request_sync(self) -> asyncio.Task[SyncState] | None:
        """Start a sync unless one is already running.

        Publishes RUNNING immediately, then runs the provider in a task on the
        current event loop.

        Returns:
            The task that resolves to the settled state, or None if the
            request was dropped because a sync is already running.

        Raises:
            CoordinatorDisposedError: If the coordinator has been disposed.
            RuntimeError: If called without a running event loop.
        """
        self._ensure_not_disposed()
        if self._state.is_running:
            logger.debug("Sync already running, request dropped")
            return None

        loop = asyncio.get_running_loop()
        # The task only starts at the next loop iteration, after RUNNING has
        # reached every subscriber.
        task = loop.create_task(self._run())
        self._task = task
        self._publish(self._state.to_running())
        return task

    async def run_sync(self) -> SyncState:
        """Request a sync (or join the running one) and wait for it to settle.

        Cancelling the caller does not cancel the sync itself.

        Returns:
            The SUCCEEDED or FAILED state the sync ended in.

        Raises:
            CoordinatorDisposedError: If the coordinator has been disposed.
            asyncio.CancelledError: If the coordinator is disposed mid-sync.
        """
        task = self.request_sync() or self._task
        if task is None:
            return self._state
        return await asyncio.shield(task)

    def dispose(self) -> None:
        """Release the coordinator.

        Drops all subscriptions and cancels a running provider call. No
        notification is delivered afterwards. Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True
        for subscription in self._subscriptions:
            subscription._active = False
        self._subscriptions.clear()
        self._pending.clear()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        logger.debug("Sync coordinator disposed")

    async def _run(self) -> SyncState:
        try:
            await self._perform()
        except Exception as e:
            log_sync_error(e)
            return self._settle(self._state.to_failed(describe_sync_error(e)))
        return self._settle(self._state.to_succeeded(self._clock()))

    async def _perform(self) -> None:
        if self._timeout is None:
            await self._provider.perform_sync()
            return
        try:
            async with asyncio.timeout(self._timeout) as deadline:
                await self._provider.perform_sync()
        except TimeoutError as e:
            if not deadline.expired():
                # Raised by the provider itself, not by our deadline
                raise
            raise SyncTimeoutError(self._timeout) from e

    def _settle(self, state: SyncState) -> SyncState:
        self._task = None
        if self._disposed:
            return state
        self._publish(state)
        return state

    def _publish(self, state: SyncState) -> None:
        self._state = state
        logger.debug("Sync state -> %s", state.phase.value)
        self._pending.append(state)
        if self._publishing:
            # Re-entrant publish from an observer: the outer loop delivers it
            # after the current state reached every subscriber.
            return
        self._publishing = True
        try:
            while self._pending and not self._disposed:
                next_state = self._pending.popleft()
                for subscription in list(self._subscriptions):
                    subscription._deliver(next_state)
        finally:
            self._publishing = False
            self._pending.clear()

    def _remove_subscription(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise CoordinatorDisposedError()
