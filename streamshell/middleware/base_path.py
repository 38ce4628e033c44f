"""
Base Path Middleware for streamshell

Strips the configured base path from each request URL before rendering.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp


def page_url_for(path: str, query: str, base: str) -> str:
    """Request URL (path plus query string) with the first ``base`` removed."""
    original_url = f"{path}?{query}" if query else path
    return original_url.replace(base, "", 1)


class BasePathMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches the render URL to each request."""

    def __init__(self, app: ASGIApp, base: str = "/"):
        super().__init__(app)
        self.base = base

    async def dispatch(self, request: Request, call_next):
        request.state.page_url = page_url_for(request.url.path, request.url.query, self.base)
        return await call_next(request)
