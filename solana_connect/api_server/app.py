"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn solana_connect.api_server.app:app --host 0.0.0.0 --port 8000
"""

from solana_connect.api_server.server import create_app

app = create_app()

__all__ = ["app"]
