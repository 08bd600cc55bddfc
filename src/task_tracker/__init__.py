"""Task tracker: a file-backed task store behind a small JSON API."""

__version__ = "1.0.0"
