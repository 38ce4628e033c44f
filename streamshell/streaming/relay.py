"""
Streaming Relay

Pass-through sink between a renderer and the live HTTP response.
"""
from __future__ import annotations
import asyncio
from typing import Awaitable, Callable

from streamshell.models.render import Chunk
from streamshell.streaming.errors import RelayClosedError
from streamshell.streaming.response import ResponseSink


class StreamingRelay:
    """Forwards chunks to the response in arrival order.

    Every response write happens under one lock, taken in call order: the
    head goes first (``open``), then each chunk, and ``close`` queues behind
    any write still in flight so the tail always lands after the last chunk.
    Once drained the tail is handed to ``on_drained``, which finalizes the
    response.
    """

    def __init__(
        self,
        response: ResponseSink,
        head: str,
        tail: str,
        on_drained: Callable[[str], Awaitable[object]],
    ):
        self._response = response
        self._head = head
        self._tail = tail
        self._on_drained = on_drained
        self._lock = asyncio.Lock()
        self.closed = False
        self.chunks_written = 0

    async def open(self):
        """Write the head fragment."""
        async with self._lock:
            await self._response.write_body(self._head)

    async def write(self, chunk: Chunk):
        if self.closed:
            raise RelayClosedError("Chunk written after the relay was closed")
        async with self._lock:
            await self._response.write_body(chunk)
            self.chunks_written += 1

    async def close(self):
        self.closed = True
        async with self._lock:
            await self._on_drained(self._tail)
