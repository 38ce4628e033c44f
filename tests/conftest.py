"""Pytest configuration and fixtures for streamshell tests."""

from __future__ import annotations

import asyncio

import pytest

from streamshell.models.render import RenderResult
from streamshell.services.template_provider import CachedTemplateProvider
from streamshell.streaming.response import ASGIResponseSink

TEMPLATE = "<html><!--app-html--></html>"


class RecordingSend:
    """ASGI ``send`` that records every message."""

    def __init__(self):
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def start(self) -> dict | None:
        starts = [m for m in self.messages if m["type"] == "http.response.start"]
        assert len(starts) <= 1
        return starts[0] if starts else None

    @property
    def status(self) -> int | None:
        return self.start["status"] if self.start else None

    @property
    def headers(self) -> dict[str, str]:
        if not self.start:
            return {}
        return {k.decode(): v.decode() for k, v in self.start["headers"]}

    @property
    def body_chunks(self) -> list[bytes]:
        return [m["body"] for m in self.messages if m["type"] == "http.response.body"]

    @property
    def body(self) -> str:
        return b"".join(self.body_chunks).decode()

    @property
    def ended(self) -> bool:
        bodies = [m for m in self.messages if m["type"] == "http.response.body"]
        return bool(bodies) and bodies[-1]["more_body"] is False


class FakeHandle:
    def __init__(self, when: float, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Controllable clock exposing the ``call_later`` the abort timer uses."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for handle in list(self.handles):
            if not (handle.cancelled or handle.fired) and handle.when <= self.now:
                handle.fired = True
                handle.callback()

    def fire_all(self) -> None:
        """Run every scheduled callback again, cancelled or already fired."""
        for handle in list(self.handles):
            handle.fired = True
            handle.callback()


class ManualRenderer:
    """Rendering function driven step by step from a test."""

    def __init__(self):
        self.options = None
        self.sink = None
        self.url = None
        self.manifest = None
        self.abort_calls = 0

    def __call__(self, url, manifest, options) -> RenderResult:
        self.url = url
        self.manifest = manifest
        self.options = options
        return RenderResult(pipe=self._pipe, abort=self._abort)

    def _pipe(self, sink) -> None:
        self.sink = sink

    def _abort(self) -> None:
        self.abort_calls += 1


class StubRendererProvider:
    def __init__(self, render, manifest: str | None = None):
        self.render = render
        self.manifest = manifest

    async def get_renderer(self):
        return self.render


class FailingTemplateProvider:
    async def get_template(self, url: str) -> str:
        raise FileNotFoundError("index.html")


async def settle() -> None:
    """Let pending tasks run until they block."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def send() -> RecordingSend:
    return RecordingSend()


@pytest.fixture
def response(send: RecordingSend) -> ASGIResponseSink:
    return ASGIResponseSink(send)


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def renderer() -> ManualRenderer:
    return ManualRenderer()


@pytest.fixture
def template_provider() -> CachedTemplateProvider:
    return CachedTemplateProvider(TEMPLATE)


@pytest.fixture
def renderer_provider(renderer: ManualRenderer) -> StubRendererProvider:
    return StubRendererProvider(renderer)


@pytest.fixture
def stub_provider_factory():
    return StubRendererProvider


@pytest.fixture
def failing_template_provider() -> FailingTemplateProvider:
    return FailingTemplateProvider()


@pytest.fixture
def settle_tasks():
    return settle
