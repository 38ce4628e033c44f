"""
streamshell - Main Application

Streams server-rendered HTML into a static page shell.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from streamshell import __version__
from streamshell.config import Settings, get_settings
from streamshell.middleware import BasePathMiddleware
from streamshell.routes import router
from streamshell.services.renderer_loader import CachedRendererProvider, DevRendererProvider
from streamshell.services.template_provider import CachedTemplateProvider, DevTemplateProvider

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def init_providers(app: FastAPI, settings: Settings):
    """Attach the template and renderer providers for the configured mode."""
    if settings.is_production:
        # Built template and manifest are read once and shared by every request
        app.state.template_provider = await CachedTemplateProvider.from_file(
            settings.client_template_path
        )
        app.state.renderer_provider = await CachedRendererProvider.from_manifest_file(
            settings.prod_entry, settings.ssr_manifest_path
        )
        app.state.static_root = settings.client_dist_path
    else:
        app.state.template_provider = DevTemplateProvider(settings.index_html_path)
        app.state.renderer_provider = DevRendererProvider(settings.dev_entry)
        app.state.static_root = None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Streams server-rendered HTML into a static page shell",
        version=__version__,
        debug=settings.debug,
        # Every URL belongs to the page route
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Middleware stack (order matters - last added runs first)
    if settings.is_production:
        app.add_middleware(GZipMiddleware)
    app.add_middleware(BasePathMiddleware, base=settings.base)

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event():
        """Load templates and render entries on startup."""
        configure_logging(settings.log_level)
        await init_providers(app, settings)

        print("streamshell starting...")
        print(f"Mode: {settings.environment}")
        print(f"Base: {settings.base}")
        print(f"Server started at http://localhost:{settings.port}")

    @app.on_event("shutdown")
    async def shutdown_event():
        print("streamshell shutting down...")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "streamshell.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
