"""
Render contract models for streamshell

Describes what a rendering function receives and returns.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, Union

Chunk = Union[bytes, str]


class ChunkSink(Protocol):
    """Consumer a renderer writes its body chunks into.

    ``write`` returns only once the chunk has been handed to the response,
    so a renderer that awaits it never runs ahead of the client.
    """

    async def write(self, chunk: Chunk) -> None: ...

    async def close(self) -> None: ...


@dataclass(frozen=True)
class RenderOptions:
    """Lifecycle callbacks handed to a rendering function.

    ``on_shell_ready`` / ``on_shell_error`` fire once, before body streaming.
    ``on_error`` may fire any number of times.
    """

    on_shell_error: Callable[[], Awaitable[None]]
    on_shell_ready: Callable[[], Awaitable[None]]
    on_error: Callable[[BaseException], None]


@dataclass(frozen=True)
class RenderResult:
    """Handle returned by a rendering function."""

    pipe: Callable[[ChunkSink], None]
    abort: Callable[[], None]


# render(url, manifest, options) -> RenderResult
RenderFunction = Callable[[str, Optional[str], RenderOptions], RenderResult]
