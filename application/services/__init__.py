"""Application services root exports."""
from .cache import TTLCache
from .container import ServiceContainer
from .leaderboard_service import LeaderboardService
from .match_list_service import MatchListService
from .profile_service import PlayerProfileService
from .stats import FrequencyTable, percentage, round_half_up, utc_now
from .winrate_service import WinrateService

__all__ = [
    "TTLCache",
    "ServiceContainer",
    "LeaderboardService",
    "MatchListService",
    "PlayerProfileService",
    "WinrateService",
    "FrequencyTable",
    "percentage",
    "round_half_up",
    "utc_now",
]
