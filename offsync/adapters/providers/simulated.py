"""Simulated sync provider that only waits.

Stands in for a real backend while wiring up an application or a demo.
"""

import asyncio
import logging

from offsync.domain.exceptions import SyncFailure

logger = logging.getLogger(__name__)


class SimulatedSyncProvider:
    """Sync provider that sleeps to simulate network or database latency.

    Args:
        delay: Seconds to wait before completing (default: 2.0).
        failure: If set, the sync fails with this message after the delay.

    Raises:
        ValueError: If delay is negative.
    """

    def __init__(self, delay: float = 2.0, failure: str | None = None) -> None:
        if delay < 0:
            raise ValueError(f"delay cannot be negative, got {delay}")
        self.delay = delay
        self.failure = failure

    async def perform_sync(self) -> None:
        """Wait for the configured delay, then succeed or fail."""
        logger.debug("Simulating sync latency of %.2fs", self.delay)
        await asyncio.sleep(self.delay)
        if self.failure:
            raise SyncFailure(self.failure)
