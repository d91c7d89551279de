"""Recent win rate of one player: overall, on a champion, in a position."""
from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional, Tuple

from core.logging.logger import get_logger, timed
from domain.entities import PlayerMatchRow, WinrateStats
from domain.exceptions import InvalidArgumentError
from domain.interfaces import IMatchRepository
from .cache import TTLCache
from .stats import Clock, percentage, utc_now

logger = get_logger(__name__, service="winrate")

WinrateKey = Tuple[str, str, str]


class WinrateService:
    """Answers "how has this player done lately?" over a trailing day window.

    Results are memoised per ``(puuid, champion, position)`` when a cache is
    given.
    """

    def __init__(
        self,
        matches: IMatchRepository,
        *,
        window_days: int = 15,
        cache: Optional[TTLCache[WinrateStats]] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.matches = matches
        self.window_days = window_days
        self.cache = cache
        self._clock = clock

    @timed
    async def winrate(self, puuid: str, champion_name: str, position: str) -> WinrateStats:
        if not puuid or not puuid.strip() or not champion_name or not champion_name.strip():
            raise InvalidArgumentError("Missing required parameters: puuid, champion")
        if not position or not position.strip():
            raise InvalidArgumentError("Position required for winrate statistics")

        key: WinrateKey = (puuid, champion_name, position)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.trace(lambda: "winrate-cache-hit", extra={"puuid": puuid})
                return cached

        since = self._clock() - timedelta(days=self.window_days)
        rows = await self.matches.player_rows(puuid, since)
        stats = self.aggregate(rows, champion_name, position)
        if self.cache is not None:
            self.cache.set(key, stats)
        return stats

    @staticmethod
    def aggregate(rows: Iterable[PlayerMatchRow], champion_name: str, position: str) -> WinrateStats:
        """Fold unwound rows into the three win rates.

        Position is compared exactly against the stored value. A row whose
        outcome is unknown counts as a game but never as a win.
        """
        total_games = total_wins = 0
        champion_games = champion_wins = 0
        position_games = position_wins = 0
        undecided = 0

        for row in rows:
            won = row.won is True
            if row.won is None:
                undecided += 1
            total_games += 1
            total_wins += won
            if row.player.champion_name == champion_name:
                champion_games += 1
                champion_wins += won
            if row.player.position == position:
                position_games += 1
                position_wins += won

        if undecided:
            logger.warning(lambda: f"winrate-undecided-matches count={undecided}")

        return WinrateStats(
            overall_winrate=percentage(total_wins, total_games),
            champion_winrate=percentage(champion_wins, champion_games),
            position_winrate=percentage(position_wins, position_games),
            total_games=total_games,
            champion_games=champion_games,
            position_games=position_games,
        )
