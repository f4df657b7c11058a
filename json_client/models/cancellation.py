"""Caller-driven cancellation signal for in-flight requests."""

from __future__ import annotations

import asyncio
from typing import Optional


class CancellationToken:
    """One-shot signal that asks a pending request to stop.

    The token is owned by the caller: the client only listens to it.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None

    @classmethod
    def after(cls, seconds: float) -> "CancellationToken":
        """Create a token that cancels itself once ``seconds`` have elapsed.

        Must be called from inside a running event loop.
        """
        token = cls()
        loop = asyncio.get_running_loop()
        token._timer = loop.call_later(seconds, token.cancel, "Request timed out")
        return token

    @property
    def cancelled(self) -> bool:
        """Whether the token has been signaled."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given to :meth:`cancel`, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Signal the token. Later calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._event.set()

    async def wait(self) -> None:
        """Suspend until the token is signaled."""
        await self._event.wait()
