"""Domain enumerations."""
from .queue_type import QueueType
from .role import Role

__all__ = [
    'QueueType',
    'Role',
]
