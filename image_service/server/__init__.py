"""HTTP front door built on FastAPI."""

from .app import API_PREFIX, create_app

__all__ = ["API_PREFIX", "create_app"]
