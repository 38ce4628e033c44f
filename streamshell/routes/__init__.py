"""HTTP routes."""
from streamshell.routes.pages import router

__all__ = ["router"]
