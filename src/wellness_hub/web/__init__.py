"""Web interface for wellness-hub."""

from .app import create_app

__all__ = ["create_app"]
