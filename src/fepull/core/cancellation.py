"""
Cooperative cancellation for the fetch pipeline.

A CancellationToken is created once per CLI invocation and passed to the
fetcher and git client. Signal handlers call ``cancel()``; in-flight git
calls notice it, kill their subprocess and raise OperationCancelledError,
so workspaces are cleaned up by normal unwinding.
"""

import asyncio
from typing import Optional

from loguru import logger

from fepull.core.errors import OperationCancelledError


class CancellationToken:
    """Flag shared by every operation of one run."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        if self._event.is_set():
            return
        self.reason = reason
        logger.warning(f"Cancellation requested: {reason}")
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError(f"Operation cancelled ({self.reason})")

    async def wait(self) -> None:
        await self._event.wait()
