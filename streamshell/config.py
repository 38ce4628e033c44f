"""
streamshell Server Configuration
"""
from __future__ import annotations
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Runtime mode: "development" or "production"
    # - "development": index.html and the render entry are re-read on every request
    # - "production": the built template, SSR manifest and entry are loaded once
    environment: str = "development"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 5173
    base: str = "/"

    # Page template and build output
    index_html_path: Path = Path("index.html")
    client_dist_path: Path = Path("dist/client")
    ssr_manifest_path: Path = Path("dist/client/.vite/ssr-manifest.json")

    # Render entry points, as "module:attribute"
    dev_entry: str = "streamshell.demo:render"
    prod_entry: str = "streamshell.demo:render"

    # Application Configuration
    app_name: str = "streamshell"
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def client_template_path(self) -> Path:
        """Path to the built index.html served in production."""
        return self.client_dist_path / "index.html"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
