"""
Renderer Loader for streamshell

Resolves "module:attribute" entry references to rendering functions.
"""
from __future__ import annotations
import importlib
from pathlib import Path
from typing import Optional

from streamshell.models.render import RenderFunction
from streamshell.services.template_provider import read_text
from streamshell.streaming.errors import RendererLoadError


def resolve_entry(reference: str, reload: bool = False) -> RenderFunction:
    """Import ``module:attribute`` (attribute defaults to ``render``)."""
    module_name, _, attribute = reference.partition(":")
    attribute = attribute or "render"

    try:
        module = importlib.import_module(module_name)
        if reload:
            module = importlib.reload(module)
    except ImportError as e:
        raise RendererLoadError(f"Cannot import render entry {reference!r}: {e}") from e

    render = getattr(module, attribute, None)
    if not callable(render):
        raise RendererLoadError(f"Render entry {reference!r} is not callable")
    return render


class DevRendererProvider:
    """Re-imports the entry module on every request so edits show up immediately."""

    manifest: Optional[str] = None

    def __init__(self, entry: str):
        self.entry = entry

    async def get_renderer(self) -> RenderFunction:
        return resolve_entry(self.entry, reload=True)


class CachedRendererProvider:
    """Imports the entry once and serves it with the build's SSR manifest."""

    def __init__(self, entry: str, manifest: Optional[str] = None):
        self.entry = entry
        self.manifest = manifest
        self._render: Optional[RenderFunction] = None

    @classmethod
    async def from_manifest_file(cls, entry: str, manifest_path: Path) -> CachedRendererProvider:
        return cls(entry, await read_text(Path(manifest_path)))

    async def get_renderer(self) -> RenderFunction:
        if self._render is None:
            self._render = resolve_entry(self.entry)
        return self._render
