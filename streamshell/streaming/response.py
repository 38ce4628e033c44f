"""
HTTP Response Sink

Writes status, headers and body chunks straight to the ASGI ``send``
callable, so each body write is awaited by the server before the next one.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Protocol, Union

from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from streamshell.streaming.errors import ResponseCommittedError

Body = Union[bytes, str]


class Commitment(str, Enum):
    UNCOMMITTED = "uncommitted"
    COMMITTED = "committed"


class ResponseSink(Protocol):
    """What the streaming pipeline needs from an HTTP response."""

    @property
    def committed(self) -> bool: ...

    def set_status(self, code: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    async def write_body(self, data: Body) -> None: ...

    async def finalize(self, data: Body = b"") -> None: ...


def _to_bytes(data: Body) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class ASGIResponseSink:
    """ResponseSink over a raw ASGI connection.

    The response start message goes out with the first body write (or with
    ``finalize``); from then on status and headers are fixed.
    """

    def __init__(self, send: Send):
        self._send = send
        self.status_code = 200
        self.headers: Dict[str, str] = {}
        self.commitment = Commitment.UNCOMMITTED
        self.finalized = False

    @property
    def committed(self) -> bool:
        return self.commitment is Commitment.COMMITTED

    def set_status(self, code: int):
        if self.committed:
            raise ResponseCommittedError(f"Cannot set status {code}: response already committed")
        self.status_code = code

    def set_header(self, name: str, value: str):
        if self.committed:
            raise ResponseCommittedError(f"Cannot set header {name!r}: response already committed")
        self.headers[name.lower()] = value

    async def write_body(self, data: Body):
        if self.finalized:
            raise ResponseCommittedError("Cannot write to a finalized response")
        body = _to_bytes(data)
        if not self.committed:
            await self._start()
        if body:
            await self._send({"type": "http.response.body", "body": body, "more_body": True})

    async def finalize(self, data: Body = b""):
        if self.finalized:
            raise ResponseCommittedError("Response already finalized")
        body = _to_bytes(data)
        if not self.committed:
            self.headers.setdefault("content-length", str(len(body)))
            await self._start()
        self.finalized = True
        await self._send({"type": "http.response.body", "body": body, "more_body": False})

    async def _start(self):
        self.commitment = Commitment.COMMITTED
        raw_headers = [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in self.headers.items()
        ]
        await self._send({
            "type": "http.response.start",
            "status": self.status_code,
            "headers": raw_headers,
        })


class StreamingPageResponse(Response):
    """Starlette response that lets a RequestDispatcher drive the connection."""

    media_type = "text/html"

    def __init__(self, dispatcher):
        super().__init__(status_code=200, media_type=self.media_type)
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.dispatcher.dispatch(ASGIResponseSink(send))
        if self.background is not None:
            await self.background()
