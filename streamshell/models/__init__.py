"""Render contract models."""
from streamshell.models.render import Chunk, ChunkSink, RenderFunction, RenderOptions, RenderResult

__all__ = ["Chunk", "ChunkSink", "RenderFunction", "RenderOptions", "RenderResult"]
