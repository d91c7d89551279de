"""Match listings for the history pages."""
from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Dict, List

from core.logging.logger import get_logger
from domain.entities import Match, MatchPage, Summoner
from domain.exceptions import InvalidArgumentError, NotFoundError
from domain.interfaces import IMatchRepository, ISummonerRepository
from .stats import Clock, utc_now

logger = get_logger(__name__, service="matches")


class MatchListService:
    """Thin composition over the repositories.

    Listings can be re-labelled with the live roster: a member's current
    name replaces whatever name was stored when the match was written.
    """

    def __init__(
        self,
        matches: IMatchRepository,
        summoners: ISummonerRepository,
        *,
        tracked_window_days: int = 7,
        clock: Clock = utc_now,
    ) -> None:
        self.matches = matches
        self.summoners = summoners
        self.tracked_window_days = tracked_window_days
        self._clock = clock

    async def match(self, match_id: str) -> Match:
        if not match_id or not match_id.strip():
            raise InvalidArgumentError("Missing required parameter: matchId")
        found = await self.matches.match_by_id(match_id)
        if found is None:
            logger.debug(lambda: "match-not-found", extra={"match_id": match_id})
            raise NotFoundError("Match not found")
        return found

    async def matches_for_player(self, puuid: str) -> List[Match]:
        if not puuid or not puuid.strip():
            raise InvalidArgumentError("Missing required parameter: playerPuuid")
        return await self.matches.matches_by_player(puuid)

    async def recent_matches(self, limit: int = 10, *, with_summoners: bool = True) -> List[Match]:
        recent = await self.matches.recent_matches(limit)
        if not with_summoners:
            return recent
        return await self.with_live_names(recent)

    async def recent_matches_page(
        self,
        page_size: int = 10,
        page: int = 1,
        *,
        with_summoners: bool = True,
    ) -> MatchPage:
        since = self._clock() - timedelta(days=self.tracked_window_days)
        result = await self.matches.recent_matches_paginated(page_size, page, since)
        if not with_summoners or not result.items:
            return result
        return dataclasses.replace(result, items=await self.with_live_names(result.items))

    async def with_live_names(self, matches: List[Match]) -> List[Match]:
        roster = {s.puuid: s for s in await self.summoners.all_summoners()}
        return [self.relabel(m, roster) for m in matches]

    @staticmethod
    def relabel(match: Match, roster: Dict[str, Summoner]) -> Match:
        players = []
        for player in match.players:
            member = roster.get(player.puuid)
            players.append(player if member is None else player.relabel(member.display_name, member.real_name))
        return match.with_players(players)
