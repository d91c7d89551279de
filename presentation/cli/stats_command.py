from __future__ import annotations

import json
from typing import Any, List, Optional

from application.services import ServiceContainer
from core.logging.context import context
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import LeaderboardEntry, Match, PlayerProfile, WinrateStats
from domain.enums import Role
from domain.exceptions import StatsError


def _rule(width: int = 57) -> str:
    return "=" * width


class StatsCommand:
    """Console rendering of the same reports the HTTP API serves."""

    def __init__(self, services: ServiceContainer, *, json_out: bool = False) -> None:
        self.services = services
        self.json_out = json_out
        self.logger: StructuredLogger = get_logger(__name__, service="stats-cli")

    def _emit_json(self, payload: Any) -> None:
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    async def _guarded(self, command: str, coro) -> int:
        with context(command=command):
            try:
                await coro
                return 0
            except StatsError as e:
                self.logger.warning(lambda: f"{command}-failed {e}")
                if self.json_out:
                    self._emit_json({"error": str(e)})
                else:
                    print(f"Error: {e}")
                return 1

    # players

    async def players(self) -> int:
        return await self._guarded("players", self._players())

    async def _players(self) -> None:
        entries = await self.services.leaderboard.leaderboard()
        if self.json_out:
            self._emit_json({"players": [e.to_dict() for e in entries]})
            return
        self._print_leaderboard(entries)

    def _print_leaderboard(self, entries: List[LeaderboardEntry]) -> None:
        print(_rule())
        print("LEADERBOARD")
        print(_rule())
        if not entries:
            print("No recent matches.")
            return
        for rank, e in enumerate(entries, start=1):
            kda = e.average_kda
            role = Role.display(e.main_role) if e.main_role else "-"
            print(
                f"{rank:>2}. {e.summoner_name:<20} {e.total_matches:>3} games  "
                f"{e.win_rate:>5.1f}% WR  {kda.kills}/{kda.deaths}/{kda.assists} ({kda.ratio:.2f})  "
                f"{e.most_played_champion or '-'} / {role}"
            )

    # player

    async def player(self, puuid: str) -> int:
        return await self._guarded("player", self._player(puuid))

    async def _player(self, puuid: str) -> None:
        profile = await self.services.profiles.profile(puuid)
        if self.json_out:
            self._emit_json({"profile": profile.to_dict()})
            return
        self._print_profile(profile)

    def _print_profile(self, p: PlayerProfile) -> None:
        print(_rule())
        title = p.summoner_name if not p.real_name else f"{p.summoner_name} ({p.real_name})"
        print(title)
        print(_rule())
        print(f"Matches: {p.total_matches}  W/L: {p.wins}/{p.losses}  Win rate: {p.win_rate}%")
        print(f"Average K/D/A: {p.average_kills}/{p.average_deaths}/{p.average_assists}")
        print(f"Average MVP score: {p.average_mvp_score}")
        print(f"Average damage: {p.average_damage_dealt} (to champions {p.average_damage_to_champions})")
        print(f"Average gold: {p.average_gold_earned}  vision: {p.average_vision_score}")
        print(f"Average pings: {p.average_pings}")
        if p.most_played_champions:
            print("\nChampions:")
            for c in p.most_played_champions:
                print(
                    f"  {c.champion:<16} {c.games:>3} games  {c.win_rate:>5.1f}% WR  "
                    f"{c.average_kills}/{c.average_deaths}/{c.average_assists}"
                )
        if p.most_played_positions:
            print("\nPositions:")
            for pos in p.most_played_positions:
                print(f"  {Role.display(pos.position):<10} {pos.games:>3} games  {pos.win_rate:>5.1f}% WR")
        if p.teammates_stats:
            print("\nTeammates:")
            for t in p.teammates_stats:
                print(f"  {t.summoner_name:<20} {t.games_played:>3} games  {t.wins}W {t.losses}L  {t.win_rate:>5.1f}% WR")
        if p.recent_matches:
            print("\nRecent matches:")
            self._print_matches(p.recent_matches, highlight=p.puuid)

    # matches

    async def matches(self, *, page: int = 1, limit: int = 10) -> int:
        return await self._guarded("matches", self._matches(page, limit))

    async def _matches(self, page: int, limit: int) -> None:
        result = await self.services.matches.recent_matches_page(limit, page)
        if self.json_out:
            self._emit_json({
                "matches": [m.to_dict() for m in result.items],
                "pagination": result.pagination_dict(),
            })
            return
        print(_rule())
        print(f"MATCHES  page {result.page}/{result.total_pages}  ({result.total_count} total, "
              f"{result.tracked_last_week} in the last week)")
        print(_rule())
        if not result.items:
            print("No matches on this page.")
            return
        self._print_matches(result.items)

    def _print_matches(self, matches: List[Match], highlight: Optional[str] = None) -> None:
        for m in matches:
            minutes, seconds = divmod(int(m.game_duration_seconds or 0), 60)
            print(f"  {m.match_id}  {m.timestamp}  {m.game_type}  {minutes}:{seconds:02d}")
            for pl in m.tracked_players:
                marker = "*" if pl.puuid == highlight else " "
                outcome = m.outcome_for(pl)
                result = "WIN" if outcome else ("LOSS" if outcome is False else "-")
                print(
                    f"   {marker} {pl.summoner_name:<20} {pl.champion_name:<14} "
                    f"{Role.display(pl.position):<8} {pl.kills}/{pl.deaths}/{pl.assists} "
                    f"KDA {pl.kda:.2f}  {result}"
                )

    # winrate

    async def winrate(self, puuid: str, champion: str, position: str) -> int:
        return await self._guarded("winrate", self._winrate(puuid, champion, position))

    async def _winrate(self, puuid: str, champion: str, position: str) -> None:
        stats: WinrateStats = await self.services.winrate.winrate(puuid, champion, position)
        if self.json_out:
            self._emit_json(stats.to_dict())
            return
        print(f"Overall:  {stats.overall_winrate:>5.1f}% over {stats.total_games} games")
        print(f"{champion}:  {stats.champion_winrate:>5.1f}% over {stats.champion_games} games")
        print(f"{Role.display(position)}:  {stats.position_winrate:>5.1f}% over {stats.position_games} games")
