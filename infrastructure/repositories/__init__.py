"""Infrastructure repositories module."""
from .document_mapper import parse_match_data, parse_player_data, parse_summoner_data, parse_team_data
from .memory_repository import InMemoryMatchRepository, InMemorySummonerRepository, load_fixtures
from .mongo_repository import MongoMatchRepository, MongoSummonerRepository

__all__ = [
    'InMemoryMatchRepository',
    'InMemorySummonerRepository',
    'MongoMatchRepository',
    'MongoSummonerRepository',
    'load_fixtures',
    'parse_match_data',
    'parse_player_data',
    'parse_summoner_data',
    'parse_team_data',
]
