"""Domain interfaces."""
from .browser import IBrowser, IBrowserLauncher

__all__ = [
    'IBrowser',
    'IBrowserLauncher',
]
