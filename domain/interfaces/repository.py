"""Repository interfaces for read-only access to the tracker's store."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ..entities import Match, MatchPage, PlayerMatchRow, Summoner

MAX_PAGE_SIZE = 50


def clamp_paging(page_size: int, page_number: int, max_page_size: int = MAX_PAGE_SIZE) -> Tuple[int, int]:
    """Clamp a page size into ``[1, max_page_size]`` and a page number to ``>= 1``."""
    return max(1, min(int(page_size), max_page_size)), max(1, int(page_number))


class IMatchRepository(ABC):
    """Interface for the ``matches`` collection.

    Missing data is ``None`` or an empty list; only an unreachable store
    raises (``RepositoryUnavailableError``).
    """

    @abstractmethod
    async def recent_matches(self, limit: int) -> List[Match]:
        """Newest matches first, at most ``limit``."""

    @abstractmethod
    async def match_by_id(self, match_id: str) -> Optional[Match]:
        """Get a single match by id."""

    @abstractmethod
    async def matches_by_player(self, puuid: str) -> List[Match]:
        """Every match with a row for ``puuid``, newest first."""

    @abstractmethod
    async def recent_matches_paginated(
        self,
        page_size: int,
        page_number: int,
        tracked_since: datetime,
    ) -> MatchPage:
        """One page of recent matches plus the count of tracked matches since ``tracked_since``."""

    @abstractmethod
    async def player_rows(self, puuid: str, since: datetime) -> List[PlayerMatchRow]:
        """Matches at or after ``since`` unwound to ``puuid``'s row."""

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store answers."""


class ISummonerRepository(ABC):
    """Interface for the ``summoners`` roster collection."""

    @abstractmethod
    async def summoner_by_puuid(self, puuid: str) -> Optional[Summoner]:
        """Get a roster member by PUUID."""

    @abstractmethod
    async def all_summoners(self) -> List[Summoner]:
        """The whole roster, in store order."""
