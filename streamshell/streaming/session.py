"""
Render Session

Per-request state owned by a single RequestDispatcher.
"""
from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from streamshell.streaming.timer import AbortTimer


class DispatchState(str, Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    SHELL_FAILED = "shell_failed"
    STREAMING = "streaming"
    DONE = "done"
    CRASHED = "crashed"


TERMINAL_STATES = {DispatchState.DONE, DispatchState.CRASHED}


@dataclass
class RenderSession:
    """Runtime state of one streamed response."""
    url: str
    state: DispatchState = DispatchState.IDLE
    did_error: bool = False
    errors: List[BaseException] = field(default_factory=list)
    history: List[DispatchState] = field(default_factory=lambda: [DispatchState.IDLE])
    timer: Optional[AbortTimer] = None
    done: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, state: DispatchState):
        """Move to ``state``, recording it in the history."""
        self.state = state
        self.history.append(state)

    def record_error(self, error: BaseException):
        """Remember a render error so a not yet computed status becomes 500."""
        self.did_error = True
        self.errors.append(error)

    async def complete(self, response, payload=b"", state: DispatchState = DispatchState.DONE) -> bool:
        """Finalize ``response`` with ``payload`` exactly once.

        Returns False when the session already reached a terminal state.
        """
        if self.finished:
            return False
        self.transition(state)
        self._cancel_timer()
        try:
            await response.finalize(payload)
        finally:
            self.done.set()
        return True

    def abandon(self, state: DispatchState = DispatchState.CRASHED):
        """End the session without touching the response."""
        if self.finished:
            return
        self.transition(state)
        self._cancel_timer()
        self.done.set()

    def _cancel_timer(self):
        if self.timer is not None:
            self.timer.cancel()
