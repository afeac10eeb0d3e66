"""Application use cases."""
from .resolve_player import PlayerOverview, ResolvePlayerUseCase

__all__ = [
    'PlayerOverview',
    'ResolvePlayerUseCase',
]
