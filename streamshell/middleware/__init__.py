"""Request middleware."""
from streamshell.middleware.base_path import BasePathMiddleware

__all__ = ["BasePathMiddleware"]
