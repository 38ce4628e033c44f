"""Streaming response assembly."""
from streamshell.streaming.bridge import FALLBACK_ERROR_PAGE, RenderCallbackBridge
from streamshell.streaming.dispatcher import RequestDispatcher
from streamshell.streaming.relay import StreamingRelay
from streamshell.streaming.response import ASGIResponseSink, Commitment, StreamingPageResponse
from streamshell.streaming.session import DispatchState, RenderSession
from streamshell.streaming.template import APP_HTML_MARKER, split_template
from streamshell.streaming.timer import ABORT_DELAY_MS, AbortTimer

__all__ = [
    "ABORT_DELAY_MS",
    "APP_HTML_MARKER",
    "ASGIResponseSink",
    "AbortTimer",
    "Commitment",
    "DispatchState",
    "FALLBACK_ERROR_PAGE",
    "RenderCallbackBridge",
    "RenderSession",
    "RequestDispatcher",
    "StreamingPageResponse",
    "StreamingRelay",
    "split_template",
]
