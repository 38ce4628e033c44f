#!/usr/bin/env python3
"""
streamshell - Quick Start Script

Run this script to start the streamshell server.
"""
import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    import uvicorn
    from streamshell.config import get_settings

    settings = get_settings()

    print("=" * 50)
    print("streamshell")
    print("=" * 50)
    print(f"Server starting at http://{settings.host}:{settings.port}{settings.base}")
    print(f"Mode: {settings.environment}")
    print("=" * 50)

    uvicorn.run(
        "streamshell.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
