"""
Abort Timer

A single-shot deadline that asks the renderer to stop if the response has
not finished streaming in time.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ABORT_DELAY_MS = 10000


class AbortTimer:
    """One-shot timer scheduled on the event loop.

    ``loop`` only needs ``call_later(delay, callback)`` returning a handle
    with ``cancel()``, so tests can pass a fake clock.
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        delay_ms: int = ABORT_DELAY_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._on_expire = on_expire
        self.delay_ms = delay_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self.expired = False
        self.cancelled = False

    @property
    def pending(self) -> bool:
        return self._handle is not None and not (self.expired or self.cancelled)

    def start(self):
        """Schedule expiry ``delay_ms`` from now."""
        if self._handle is not None:
            return
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire)

    def cancel(self):
        """Cancel the pending expiry. Safe after expiry and on repeated calls."""
        if self.expired or self.cancelled:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def _fire(self):
        if self.expired or self.cancelled:
            return
        self.expired = True
        logger.warning("Render did not finish within %d ms, aborting", self.delay_ms)
        self._on_expire()
