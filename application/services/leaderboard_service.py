"""Roster-wide leaderboard over a trailing window."""
from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import List, Optional, Sequence

from core.logging.logger import get_logger, timed
from domain.entities import AverageKDA, LeaderboardEntry, PlayerMatchRow, Summoner
from domain.interfaces import IMatchRepository, ISummonerRepository
from .stats import Clock, FrequencyTable, average, percentage, utc_now

logger = get_logger(__name__, service="leaderboard")


class LeaderboardService:
    """Ranks every roster member by how much they played recently."""

    def __init__(
        self,
        matches: IMatchRepository,
        summoners: ISummonerRepository,
        *,
        window_days: int = 14,
        clock: Clock = utc_now,
    ) -> None:
        self.matches = matches
        self.summoners = summoners
        self.window_days = window_days
        self._clock = clock

    @timed
    async def leaderboard(self) -> List[LeaderboardEntry]:
        roster = await self.summoners.all_summoners()
        since = self._clock() - timedelta(days=self.window_days)
        # one independent read per member; nothing is shared between them
        per_player = await asyncio.gather(
            *(self.matches.player_rows(s.puuid, since) for s in roster)
        )
        entries = [
            entry
            for entry in (self.summarize(s, rows) for s, rows in zip(roster, per_player))
            if entry is not None
        ]
        # sort is stable: equal match counts stay in roster order
        entries.sort(key=lambda e: -e.total_matches)
        logger.debug(lambda: f"leaderboard-built roster={len(roster)} active={len(entries)}")
        return entries

    @staticmethod
    def summarize(summoner: Summoner, rows: Sequence[PlayerMatchRow]) -> Optional[LeaderboardEntry]:
        """Summary for one member, or ``None`` when they have no games in the window."""
        if not rows:
            return None

        total_matches = len(rows)
        total_wins = kills = deaths = assists = 0
        champions = FrequencyTable()
        positions = FrequencyTable()
        for row in rows:
            total_wins += row.won is True
            kills += row.player.kills
            deaths += row.player.deaths
            assists += row.player.assists
            champions.add(row.player.champion_name)
            positions.add(row.player.position)

        return LeaderboardEntry(
            puuid=summoner.puuid,
            summoner_name=summoner.display_name,
            real_name=summoner.real_name,
            total_matches=total_matches,
            win_rate=percentage(total_wins, total_matches),
            average_kda=AverageKDA(
                kills=average(kills, total_matches),
                deaths=average(deaths, total_matches),
                assists=average(assists, total_matches),
            ),
            # an empty champion/position string is reported as no value
            most_played_champion=champions.top() or None,
            main_role=positions.top() or None,
        )
