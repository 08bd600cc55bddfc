"""HTTP layer exposing the task store as a JSON API."""

from .app import create_app

__all__ = ["create_app"]
