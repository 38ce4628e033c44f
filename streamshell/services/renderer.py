"""
Generator Renderer for streamshell

Builds a rendering function from an async generator of markup chunks.

The first chunk the generator yields is the shell: failing (or being
aborted) before it arrives reports ``on_shell_error``. Everything after it
is streamed into the piped sink, and failures at that point go to
``on_error`` while the response is closed best-effort.
"""
from __future__ import annotations
import asyncio
import logging
from typing import AsyncIterator, Callable, Optional

from streamshell.models.render import Chunk, ChunkSink, RenderOptions, RenderResult
from streamshell.streaming.errors import RenderAbortedError

logger = logging.getLogger(__name__)

# produce(url, manifest) -> async iterator of chunks
ChunkProducer = Callable[[str, Optional[str]], AsyncIterator[Chunk]]

_ABORTED = object()


class GeneratorRenderer:
    """Callable with the ``render(url, manifest, options)`` signature."""

    def __init__(self, produce: ChunkProducer):
        self.produce = produce

    def __call__(self, url: str, manifest: Optional[str], options: RenderOptions) -> RenderResult:
        task = RenderTask(self.produce(url, manifest), options)
        return task.start()


class RenderTask:
    """One running render: pulls chunks and pushes them into the piped sink."""

    def __init__(self, chunks: AsyncIterator[Chunk], options: RenderOptions):
        self._chunks = chunks
        self._options = options
        self._sink: Optional[ChunkSink] = None
        self._piped = asyncio.Event()
        self._aborted = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def start(self) -> RenderResult:
        self._task = asyncio.get_running_loop().create_task(self._run())
        return RenderResult(pipe=self.pipe, abort=self.abort)

    def pipe(self, sink: ChunkSink):
        self._sink = sink
        self._piped.set()

    def abort(self):
        """Ask the render to stop. Later calls are no-ops."""
        if not self._aborted.is_set():
            logger.info("Render aborted")
            self._aborted.set()

    async def _run(self):
        try:
            shell = await self._next_chunk()
        except StopAsyncIteration:
            shell = b""
        except Exception as e:
            await self._options.on_shell_error()
            self._options.on_error(e)
            return

        if shell is _ABORTED:
            await self._options.on_shell_error()
            self._options.on_error(RenderAbortedError("Render aborted before the shell was ready"))
            return

        try:
            await self._options.on_shell_ready()
            await self._piped.wait()
            await self._stream(shell)
        except Exception as e:
            self._options.on_error(e)
        finally:
            if self._sink is not None:
                await self._close_sink()

    async def _stream(self, shell: Chunk):
        if shell:
            await self._sink.write(shell)
        while True:
            try:
                chunk = await self._next_chunk()
            except StopAsyncIteration:
                return
            if chunk is _ABORTED:
                self._options.on_error(RenderAbortedError("Render aborted while streaming"))
                return
            await self._sink.write(chunk)

    async def _next_chunk(self):
        """Next chunk from the producer, or ``_ABORTED`` once abort() was called."""
        if self.aborted:
            await self._discard()
            return _ABORTED

        pending = asyncio.ensure_future(self._chunks.__anext__())
        abort_wait = asyncio.ensure_future(self._aborted.wait())
        try:
            await asyncio.wait({pending, abort_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            abort_wait.cancel()

        if pending.done():
            return pending.result()

        pending.cancel()
        try:
            await pending
        except (asyncio.CancelledError, StopAsyncIteration):
            pass
        await self._discard()
        return _ABORTED

    async def _discard(self):
        aclose = getattr(self._chunks, "aclose", None)
        if aclose is not None:
            await aclose()

    async def _close_sink(self):
        try:
            await self._sink.close()
        except Exception as e:
            self._options.on_error(e)
