"""Domain enumerations."""
from .region import Region
from .queue_type import QueueType
from .rank import Tier, APEX_TIERS
from .role import Role

__all__ = [
    'Region',
    'QueueType',
    'Tier',
    'APEX_TIERS',
    'Role',
]
