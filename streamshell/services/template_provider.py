"""
Template Provider for streamshell

Supplies the page template containing the ``<!--app-html-->`` marker.
"""
from __future__ import annotations
from pathlib import Path
import aiofiles


async def read_text(path: Path) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        return await f.read()


class DevTemplateProvider:
    """Re-reads the template on every request."""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_template(self, url: str) -> str:
        return await read_text(self.path)


class CachedTemplateProvider:
    """Holds a template loaded once and shared read-only by every request."""

    def __init__(self, template: str):
        self._template = template

    @classmethod
    async def from_file(cls, path: Path) -> CachedTemplateProvider:
        return cls(await read_text(Path(path)))

    @property
    def template(self) -> str:
        return self._template

    async def get_template(self, url: str) -> str:
        return self._template
