"""Tests for GeneratorRenderer, the async generator render adapter."""

from __future__ import annotations

import asyncio

import pytest

from streamshell.models.render import RenderOptions
from streamshell.services.renderer import GeneratorRenderer


class Recorder:
    """Stands in for the callback bridge and the relay at once."""

    def __init__(self):
        self.events: list = []
        self.result = None
        self.finished = asyncio.Event()

    @property
    def options(self) -> RenderOptions:
        return RenderOptions(
            on_shell_error=self.on_shell_error,
            on_shell_ready=self.on_shell_ready,
            on_error=self.on_error,
        )

    async def on_shell_error(self) -> None:
        self.events.append("shell_error")
        self.finished.set()

    async def on_shell_ready(self) -> None:
        self.events.append("shell_ready")
        self.result.pipe(self)

    def on_error(self, error: BaseException) -> None:
        self.events.append(("error", type(error).__name__))

    async def write(self, chunk) -> None:
        self.events.append(("chunk", chunk))

    async def close(self) -> None:
        self.events.append("close")
        self.finished.set()


def run(produce) -> Recorder:
    recorder = Recorder()
    recorder.result = GeneratorRenderer(produce)("page", None, recorder.options)
    return recorder


class TestGeneratorRenderer:
    @pytest.mark.asyncio
    async def test_streams_shell_then_chunks_then_closes(self) -> None:
        async def produce(url, manifest):
            yield f"<h1>{url}</h1>"
            yield "<p>a</p>"
            yield b"<p>b</p>"

        recorder = run(produce)
        await recorder.finished.wait()
        assert recorder.events == [
            "shell_ready",
            ("chunk", "<h1>page</h1>"),
            ("chunk", "<p>a</p>"),
            ("chunk", b"<p>b</p>"),
            "close",
        ]

    @pytest.mark.asyncio
    async def test_failure_before_shell_reports_shell_error(self) -> None:
        async def produce(url, manifest):
            raise LookupError("no route")
            yield "unreachable"

        recorder = run(produce)
        await recorder.finished.wait()
        await asyncio.sleep(0)
        assert recorder.events == ["shell_error", ("error", "LookupError")]

    @pytest.mark.asyncio
    async def test_failure_mid_stream_reports_error_and_closes(self) -> None:
        async def produce(url, manifest):
            yield "<main>"
            raise ValueError("bad data")

        recorder = run(produce)
        await recorder.finished.wait()
        assert recorder.events == [
            "shell_ready",
            ("chunk", "<main>"),
            ("error", "ValueError"),
            "close",
        ]

    @pytest.mark.asyncio
    async def test_empty_producer_still_closes(self) -> None:
        async def produce(url, manifest):
            return
            yield

        recorder = run(produce)
        await recorder.finished.wait()
        assert recorder.events == ["shell_ready", "close"]

    @pytest.mark.asyncio
    async def test_abort_before_shell(self) -> None:
        async def produce(url, manifest):
            await asyncio.Event().wait()
            yield "never"

        recorder = run(produce)
        await asyncio.sleep(0)
        recorder.result.abort()
        recorder.result.abort()
        await recorder.finished.wait()
        await asyncio.sleep(0)
        assert recorder.events == ["shell_error", ("error", "RenderAbortedError")]

    @pytest.mark.asyncio
    async def test_abort_while_streaming_stops_production(self) -> None:
        produced: list = []

        async def produce(url, manifest):
            yield "<main>"
            produced.append("waiting")
            await asyncio.Event().wait()
            produced.append("resumed")
            yield "never"

        recorder = run(produce)
        for _ in range(10):
            await asyncio.sleep(0)
        recorder.result.abort()
        await recorder.finished.wait()

        assert produced == ["waiting"]
        assert recorder.events == [
            "shell_ready",
            ("chunk", "<main>"),
            ("error", "RenderAbortedError"),
            "close",
        ]
