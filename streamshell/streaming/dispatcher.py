"""
Request Dispatcher

Per-request orchestrator: resolves the page template and rendering
function, starts the render with a callback bridge and an abort timer, and
handles failures that escape the render callbacks.
"""
from __future__ import annotations
import asyncio
import logging
import traceback
from typing import Optional

from streamshell.streaming.bridge import RenderCallbackBridge
from streamshell.streaming.response import ResponseSink
from streamshell.streaming.session import DispatchState, RenderSession
from streamshell.streaming.timer import ABORT_DELAY_MS, AbortTimer

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Drives one request through Idle -> Rendering -> Streaming -> Done."""

    def __init__(
        self,
        url: str,
        template_provider,
        renderer_provider,
        abort_delay_ms: int = ABORT_DELAY_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.url = url
        self.template_provider = template_provider
        self.renderer_provider = renderer_provider
        self.abort_delay_ms = abort_delay_ms
        self._loop = loop
        self.session: Optional[RenderSession] = None
        self.bridge: Optional[RenderCallbackBridge] = None

    async def dispatch(self, response: ResponseSink) -> RenderSession:
        """Stream the page for ``self.url`` into ``response``.

        Returns once the session reached a terminal state.
        """
        session = self.session = RenderSession(url=self.url)
        try:
            template = await self.template_provider.get_template(self.url)
            render = await self.renderer_provider.get_renderer()

            session.transition(DispatchState.RENDERING)
            self.bridge = RenderCallbackBridge(session, response, template)
            result = render(self.url, self.renderer_provider.manifest, self.bridge.options)
            self.bridge.bind(result)

            session.timer = AbortTimer(result.abort, self.abort_delay_ms, loop=self._loop)
            session.timer.start()
        except Exception:
            await self._crash(session, response, traceback.format_exc())
            return session

        await session.done.wait()
        return session

    async def _crash(self, session: RenderSession, response: ResponseSink, diagnostic: str):
        logger.error("Failed to serve %r:\n%s", self.url, diagnostic)
        if response.committed:
            # Status line already sent; leave the partial response as it is.
            session.abandon(DispatchState.CRASHED)
            return

        response.set_status(500)
        response.set_header("Content-Type", "text/plain; charset=utf-8")
        await session.complete(response, diagnostic, DispatchState.CRASHED)
