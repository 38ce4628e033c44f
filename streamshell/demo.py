"""
Demo render entry for streamshell

Streams a small page so the server has something to show out of the box.
Point STREAMSHELL settings ``dev_entry`` / ``prod_entry`` at your own
``module:render`` to replace it.
"""
import asyncio
from html import escape
from typing import AsyncIterator, Optional

from streamshell.services.renderer import GeneratorRenderer

SECTIONS = ["Shell", "Streaming body", "Tail"]


async def demo_page(url: str, manifest: Optional[str]) -> AsyncIterator[str]:
    yield f'<main><h1>streamshell</h1><p>Rendering <code>/{escape(url)}</code></p>'
    yield "<ol>"
    for section in SECTIONS:
        await asyncio.sleep(0.05)
        yield f"<li>{escape(section)}</li>"
    yield "</ol></main>"


render = GeneratorRenderer(demo_page)
