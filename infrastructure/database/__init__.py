"""Database connection management."""
from .mongo_connection import MongoConnection

__all__ = [
    'MongoConnection',
]
