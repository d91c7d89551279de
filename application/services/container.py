"""Wiring of repositories and services for one process."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import Settings, settings as default_settings
from core.logging.logger import get_logger
from domain.entities import WinrateStats
from domain.interfaces import IMatchRepository, ISummonerRepository
from infrastructure import (
    MongoConnection,
    MongoMatchRepository,
    MongoSummonerRepository,
    load_fixtures,
)
from .cache import TTLCache
from .leaderboard_service import LeaderboardService
from .match_list_service import MatchListService
from .profile_service import PlayerProfileService
from .stats import Clock, utc_now
from .winrate_service import WinrateService

logger = get_logger(__name__, service="container")


@dataclass
class ServiceContainer:
    """Every service the transport layers need, sharing one repository handle."""

    match_repository: IMatchRepository
    summoner_repository: ISummonerRepository
    winrate: WinrateService
    leaderboard: LeaderboardService
    profiles: PlayerProfileService
    matches: MatchListService
    connection: Optional[MongoConnection] = None

    @classmethod
    def from_repositories(
        cls,
        match_repository: IMatchRepository,
        summoner_repository: ISummonerRepository,
        *,
        config: Settings = default_settings,
        clock: Clock = utc_now,
        connection: Optional[MongoConnection] = None,
    ) -> "ServiceContainer":
        cache: TTLCache[WinrateStats] = TTLCache(
            ttl_s=config.WINRATE_CACHE_TTL_S,
            max_entries=config.WINRATE_CACHE_MAX_ENTRIES,
        )
        return cls(
            match_repository=match_repository,
            summoner_repository=summoner_repository,
            winrate=WinrateService(
                match_repository,
                window_days=config.WINRATE_WINDOW_DAYS,
                cache=cache,
                clock=clock,
            ),
            leaderboard=LeaderboardService(
                match_repository,
                summoner_repository,
                window_days=config.LEADERBOARD_WINDOW_DAYS,
                clock=clock,
            ),
            profiles=PlayerProfileService(
                match_repository,
                summoner_repository,
                top_champions=config.PROFILE_TOP_CHAMPIONS,
                recent_matches=config.PROFILE_RECENT_MATCHES,
            ),
            matches=MatchListService(
                match_repository,
                summoner_repository,
                tracked_window_days=config.TRACKED_WINDOW_DAYS,
                clock=clock,
            ),
            connection=connection,
        )

    @classmethod
    def from_settings(cls, config: Settings = default_settings) -> "ServiceContainer":
        config.validate()
        if config.DATA_BACKEND == "memory":
            summoners, matches = load_fixtures(Path(config.FIXTURES_PATH))
            matches.max_page_size = config.MAX_PAGE_SIZE
            logger.info(lambda: "backend memory")
            return cls.from_repositories(matches, summoners, config=config)

        connection = MongoConnection(
            config.mongodb_uri,
            config.MONGODB_DATABASE,
            connect_timeout_ms=config.DB_CONNECT_TIMEOUT_MS,
        )
        logger.info(lambda: "backend mongo", extra={"database": config.MONGODB_DATABASE})
        return cls.from_repositories(
            MongoMatchRepository(
                connection,
                query_timeout_ms=config.DB_QUERY_TIMEOUT_MS,
                max_page_size=config.MAX_PAGE_SIZE,
            ),
            MongoSummonerRepository(connection, query_timeout_ms=config.DB_QUERY_TIMEOUT_MS),
            config=config,
            connection=connection,
        )

    async def close(self) -> None:
        if self.connection is not None:
            await self.connection.close()
