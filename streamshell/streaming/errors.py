"""
Error types for the streaming response pipeline.
"""


class StreamShellError(Exception):
    """Base class for all streamshell errors."""


class RenderContractError(StreamShellError):
    """A renderer invoked its lifecycle callbacks in an illegal order."""


class RelayClosedError(StreamShellError):
    """A chunk was written to a relay that has already been closed."""


class ResponseCommittedError(StreamShellError):
    """Status, headers or body were changed after the response was committed or finalized."""


class RendererLoadError(StreamShellError):
    """A render entry reference could not be resolved to a callable."""


class RenderAbortedError(StreamShellError):
    """Reported to ``on_error`` when a render is stopped by the abort timer."""
