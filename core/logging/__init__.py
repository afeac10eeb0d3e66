"""Structured logging on top of the stdlib ``logging`` module."""
from .config import bootstrap_logging, shutdown_logging
from .context import bind, context, get_context
from .logger import StructuredLogger, get_logger

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "bind",
    "context",
    "get_context",
    "StructuredLogger",
    "get_logger",
]
