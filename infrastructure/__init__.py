"""Infrastructure layer - database connection and repositories."""
from .database import MongoConnection
from .repositories import (
    InMemoryMatchRepository,
    InMemorySummonerRepository,
    MongoMatchRepository,
    MongoSummonerRepository,
    load_fixtures,
)

__all__ = [
    'MongoConnection',
    'InMemoryMatchRepository',
    'InMemorySummonerRepository',
    'MongoMatchRepository',
    'MongoSummonerRepository',
    'load_fixtures',
]
