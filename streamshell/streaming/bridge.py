"""
Render Callback Bridge

Turns the renderer's lifecycle callbacks into actions on the response.
"""
from __future__ import annotations
import logging
from typing import Optional

from streamshell.models.render import RenderOptions, RenderResult
from streamshell.streaming.errors import RenderContractError
from streamshell.streaming.relay import StreamingRelay
from streamshell.streaming.response import ResponseSink
from streamshell.streaming.session import DispatchState, RenderSession
from streamshell.streaming.template import split_template

logger = logging.getLogger(__name__)

FALLBACK_ERROR_PAGE = "<h1>Something went wrong</h1>"
HTML_CONTENT_TYPE = "text/html"


class RenderCallbackBridge:
    """
    State machine object passed to a rendering function as its callbacks.

    Exactly one of ``on_shell_error`` / ``on_shell_ready`` may fire, and only
    while the response is still uncommitted. ``on_error`` is accepted at any
    point: it flags the session, which turns the status into 500 only if
    ``on_shell_ready`` has not computed the status yet. After the status line
    is sent a later error can no longer change it, and the body keeps
    streaming.
    """

    def __init__(self, session: RenderSession, response: ResponseSink, template: str):
        self.session = session
        self.response = response
        self.template = template
        self.relay: Optional[StreamingRelay] = None
        self._result: Optional[RenderResult] = None
        self._shell_settled: Optional[str] = None

    @property
    def options(self) -> RenderOptions:
        return RenderOptions(
            on_shell_error=self.on_shell_error,
            on_shell_ready=self.on_shell_ready,
            on_error=self.on_error,
        )

    def bind(self, result: RenderResult):
        """Attach the handle returned by the rendering function."""
        self._result = result

    async def on_shell_error(self):
        self._settle_shell("on_shell_error")
        self.session.transition(DispatchState.SHELL_FAILED)
        logger.error("Shell failed to render for %r, serving fallback page", self.session.url)

        self.response.set_status(500)
        self.response.set_header("Content-Type", HTML_CONTENT_TYPE)
        await self.session.complete(self.response, FALLBACK_ERROR_PAGE)

    async def on_shell_ready(self):
        self._settle_shell("on_shell_ready")
        if self._result is None:
            raise RenderContractError("on_shell_ready fired before the render result was bound")

        self.response.set_status(500 if self.session.did_error else 200)
        self.response.set_header("Content-Type", HTML_CONTENT_TYPE)
        self.session.transition(DispatchState.STREAMING)

        head, tail = split_template(self.template)
        self.relay = StreamingRelay(self.response, head, tail, on_drained=self._finish)
        self._result.pipe(self.relay)
        await self.relay.open()

    def on_error(self, error: BaseException):
        self.session.record_error(error)
        logger.error(
            "Render error for %r: %s", self.session.url, error,
            exc_info=(type(error), error, error.__traceback__),
        )

    async def _finish(self, tail: str):
        await self.session.complete(self.response, tail)

    def _settle_shell(self, callback: str):
        if self._shell_settled is not None:
            raise RenderContractError(
                f"{callback} fired after {self._shell_settled}; the shell settles only once"
            )
        if self.response.committed:
            raise RenderContractError(f"{callback} fired after the response was committed")
        self._shell_settled = callback
