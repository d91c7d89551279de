"""Application layer - aggregation services."""
from .services import (
    LeaderboardService,
    MatchListService,
    PlayerProfileService,
    ServiceContainer,
    WinrateService,
)

__all__ = [
    'LeaderboardService',
    'MatchListService',
    'PlayerProfileService',
    'ServiceContainer',
    'WinrateService',
]
