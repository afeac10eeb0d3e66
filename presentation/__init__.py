"""Presentation layer - HTTP API and CLI."""
from .api import create_app

__all__ = [
    "create_app",
]
