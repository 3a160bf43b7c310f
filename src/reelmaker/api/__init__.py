"""HTTP API for the video creator."""

from .main import app, create_app

__all__ = ["app", "create_app"]
