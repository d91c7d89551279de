"""Domain layer - entities, enums, interfaces and errors."""
from .entities import (
    AverageKDA,
    ChampionStats,
    LeaderboardEntry,
    Match,
    MatchPage,
    MatchPlayer,
    PlayerMatchRow,
    PlayerProfile,
    PositionStats,
    Summoner,
    Team,
    TeammateStats,
    WinrateStats,
)
from .enums import QueueType, Role
from .exceptions import (
    InvalidArgumentError,
    NotFoundError,
    RepositoryUnavailableError,
    StatsError,
)
from .interfaces import IMatchRepository, ISummonerRepository

__all__ = [
    # Entities
    'Match',
    'MatchPlayer',
    'Team',
    'Summoner',
    'PlayerMatchRow',
    # Results
    'AverageKDA',
    'ChampionStats',
    'LeaderboardEntry',
    'MatchPage',
    'PlayerProfile',
    'PositionStats',
    'TeammateStats',
    'WinrateStats',
    # Enums
    'QueueType',
    'Role',
    # Errors
    'StatsError',
    'NotFoundError',
    'InvalidArgumentError',
    'RepositoryUnavailableError',
    # Interfaces
    'IMatchRepository',
    'ISummonerRepository',
]
