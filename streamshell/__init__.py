"""streamshell - streams server-rendered HTML into a static page shell."""

__version__ = "0.1.0"
