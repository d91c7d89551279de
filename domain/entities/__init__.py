"""Domain entities."""
from .match_player import MatchPlayer
from .team import Team
from .match import Match, PlayerMatchRow, format_timestamp, parse_timestamp
from .summoner import Summoner
from .stats import (
    AverageKDA,
    ChampionStats,
    LeaderboardEntry,
    MatchPage,
    PlayerProfile,
    PositionStats,
    TeammateStats,
    WinrateStats,
)

__all__ = [
    'MatchPlayer',
    'Team',
    'Match',
    'PlayerMatchRow',
    'Summoner',
    'parse_timestamp',
    'format_timestamp',
    'AverageKDA',
    'ChampionStats',
    'LeaderboardEntry',
    'MatchPage',
    'PlayerProfile',
    'PositionStats',
    'TeammateStats',
    'WinrateStats',
]
