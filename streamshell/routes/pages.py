"""
Page Routes for streamshell

Every GET or HEAD request is answered here: files from the client build are
served as they are, anything else is rendered and streamed as a page.
"""
from fastapi import APIRouter, Request
from fastapi.responses import FileResponse
from pathlib import Path
from typing import Optional
import mimetypes

from streamshell.middleware.base_path import page_url_for
from streamshell.streaming import RequestDispatcher, StreamingPageResponse

router = APIRouter()

# Build outputs that must never be served as static files
PRIVATE_BUILD_FILES = {"index.html"}
PRIVATE_BUILD_DIRS = {".vite"}


def get_page_url(request: Request) -> str:
    """Render URL set by BasePathMiddleware, or the raw URL without it."""
    page_url = getattr(request.state, "page_url", None)
    if page_url is None:
        page_url = page_url_for(request.url.path, request.url.query, "/")
    return page_url


def find_static_file(static_root: Optional[Path], page_url: str) -> Optional[Path]:
    """Existing file under the client build for ``page_url``, if any."""
    if static_root is None:
        return None

    rel_path = page_url.split("?", 1)[0]
    parts = Path(rel_path).parts
    if not parts or rel_path in PRIVATE_BUILD_FILES or parts[0] in PRIVATE_BUILD_DIRS:
        return None

    root = static_root.resolve()
    candidate = (root / rel_path).resolve()
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


@router.api_route("/{path:path}", methods=["GET", "HEAD"])
async def serve_page(request: Request):
    """Serve a client build file, or stream the server-rendered page."""
    state = request.app.state
    page_url = get_page_url(request)

    static_file = find_static_file(getattr(state, "static_root", None), page_url)
    if static_file is not None:
        media_type, _ = mimetypes.guess_type(str(static_file))
        return FileResponse(
            path=static_file,
            media_type=media_type or "application/octet-stream"
        )

    dispatcher = RequestDispatcher(
        url=page_url,
        template_provider=state.template_provider,
        renderer_provider=state.renderer_provider,
    )
    return StreamingPageResponse(dispatcher)
