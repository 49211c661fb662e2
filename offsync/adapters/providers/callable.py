"""Sync provider wrapping an injected callable."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any


class CallableSyncProvider:
    """Adapts a plain or async callable to the SyncOperationProvider port.

    The callable takes no arguments. Its return value is ignored; raising
    signals failure. If it returns an awaitable, the awaitable is awaited.

    Args:
        func: The synchronization routine, e.g. an application use case.
    """

    def __init__(self, func: Callable[[], Awaitable[Any] | Any]) -> None:
        self._func = func

    async def perform_sync(self) -> None:
        result = self._func()
        if inspect.isawaitable(result):
            await result
