"""In-memory repositories over already-loaded documents.

Used for tests and for serving a JSON fixture file without a database
(``DATA_BACKEND=memory``).
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from core.logging.logger import get_logger
from domain.entities import Match, MatchPage, PlayerMatchRow, Summoner
from domain.interfaces import IMatchRepository, ISummonerRepository, MAX_PAGE_SIZE, clamp_paging
from .document_mapper import parse_match_data, parse_summoner_data

logger = get_logger(__name__, service="repository")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

MatchLike = Union[Match, Dict[str, Any]]
SummonerLike = Union[Summoner, Dict[str, Any]]


def _sort_key(match: Match) -> datetime:
    return match.played_at or _OLDEST


class InMemoryMatchRepository(IMatchRepository):
    """Match repository backed by a list held in memory."""

    def __init__(self, matches: Iterable[MatchLike] = (), *, max_page_size: int = MAX_PAGE_SIZE) -> None:
        parsed = [m if isinstance(m, Match) else parse_match_data(m) for m in matches]
        # newest first, documents without a readable timestamp last
        self._matches: List[Match] = sorted(parsed, key=_sort_key, reverse=True)
        self.max_page_size = max_page_size

    async def recent_matches(self, limit: int) -> List[Match]:
        return self._matches[:max(0, limit)]

    async def match_by_id(self, match_id: str) -> Optional[Match]:
        return next((m for m in self._matches if m.match_id == match_id), None)

    async def matches_by_player(self, puuid: str) -> List[Match]:
        return [m for m in self._matches if m.find_player(puuid) is not None]

    async def recent_matches_paginated(
        self,
        page_size: int,
        page_number: int,
        tracked_since: datetime,
    ) -> MatchPage:
        page_size, page_number = clamp_paging(page_size, page_number, self.max_page_size)
        start = (page_number - 1) * page_size
        tracked = sum(
            1 for m in self._matches
            if m.played_at is not None and m.played_at >= tracked_since and m.tracked_players
        )
        return MatchPage(
            items=self._matches[start:start + page_size],
            total_count=len(self._matches),
            tracked_last_week=tracked,
            page=page_number,
            page_size=page_size,
        )

    async def player_rows(self, puuid: str, since: datetime) -> List[PlayerMatchRow]:
        rows: List[PlayerMatchRow] = []
        for match in self._matches:
            played_at = match.played_at
            if played_at is None or played_at < since:
                continue
            row = PlayerMatchRow.for_player(match, puuid)
            if row is not None:
                rows.append(row)
        return rows

    async def ping(self) -> bool:
        return True


class InMemorySummonerRepository(ISummonerRepository):
    """Roster repository backed by a list held in memory."""

    def __init__(self, summoners: Iterable[SummonerLike] = ()) -> None:
        self._summoners: List[Summoner] = [
            s if isinstance(s, Summoner) else parse_summoner_data(s) for s in summoners
        ]

    async def summoner_by_puuid(self, puuid: str) -> Optional[Summoner]:
        return next((s for s in self._summoners if s.puuid == puuid), None)

    async def all_summoners(self) -> List[Summoner]:
        return list(self._summoners)


def load_fixtures(path: Path) -> Tuple[InMemorySummonerRepository, InMemoryMatchRepository]:
    """Build both repositories from a ``{"summoners": [...], "matches": [...]}`` JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    summoners = InMemorySummonerRepository(data.get("summoners", []))
    matches = InMemoryMatchRepository(data.get("matches", []))
    logger.info(
        lambda: f"fixtures-loaded summoners={len(data.get('summoners', []))} matches={len(data.get('matches', []))}",
        extra={"path": str(path)},
    )
    return summoners, matches
