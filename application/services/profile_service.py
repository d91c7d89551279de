"""Full career profile of one player, including teammate synergy."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from core.logging.logger import get_logger, timed
from domain.entities import (
    ChampionStats,
    Match,
    MatchPlayer,
    PlayerProfile,
    PositionStats,
    Summoner,
    TeammateStats,
)
from domain.exceptions import InvalidArgumentError, NotFoundError
from domain.interfaces import IMatchRepository, ISummonerRepository
from .stats import FrequencyTable, average, percentage

logger = get_logger(__name__, service="profile")

_AVG_DIGITS = 2


@dataclass
class _Totals:
    kills: float = 0
    deaths: float = 0
    assists: float = 0
    mvp_score: float = 0
    damage_dealt: float = 0
    damage_to_champions: float = 0
    gold_earned: float = 0
    vision_score: float = 0
    wards_placed: float = 0
    wards_killed: float = 0
    pings: float = 0
    danger_pings: float = 0
    on_my_way_pings: float = 0
    enemy_missing_pings: float = 0

    def add(self, p: MatchPlayer) -> None:
        self.kills += p.kills
        self.deaths += p.deaths
        self.assists += p.assists
        self.mvp_score += p.mvp_score
        self.damage_dealt += p.total_dmg_dealt
        self.damage_to_champions += p.total_dmg_dealt_champions
        self.gold_earned += p.gold_earned
        self.vision_score += p.vision_score
        self.wards_placed += p.wards_placed
        self.wards_killed += p.wards_killed
        self.pings += p.total_pings
        self.danger_pings += p.stat("danger_pings")
        self.on_my_way_pings += p.stat("on_my_way_pings")
        self.enemy_missing_pings += p.stat("enemy_missing_pings")


@dataclass
class _SplitRecord:
    """Games and wins on one champion or in one position."""
    games: int = 0
    wins: int = 0
    kills: float = 0
    deaths: float = 0
    assists: float = 0


@dataclass
class _TeammateRecord:
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    kills: float = 0
    deaths: float = 0
    assists: float = 0
    mvp_score: float = 0


class PlayerProfileService:
    """Builds the profile page data for one player from their whole history."""

    def __init__(
        self,
        matches: IMatchRepository,
        summoners: ISummonerRepository,
        *,
        top_champions: int = 5,
        recent_matches: int = 5,
    ) -> None:
        self.matches = matches
        self.summoners = summoners
        self.top_champions = top_champions
        self.recent_matches = recent_matches

    @timed
    async def profile(self, puuid: str) -> PlayerProfile:
        if not puuid or not puuid.strip():
            raise InvalidArgumentError("Missing required parameter: puuid")
        history = await self.matches.matches_by_player(puuid)
        if not history:
            raise NotFoundError("Player not found")
        roster = await self.summoners.all_summoners()
        profile = self.build(
            puuid,
            history,
            roster,
            top_champions=self.top_champions,
            recent_matches=self.recent_matches,
        )
        if profile is None:
            raise NotFoundError("Player not found")
        return profile

    @staticmethod
    def build(
        puuid: str,
        history: Sequence[Match],
        roster: Sequence[Summoner],
        *,
        top_champions: int = 5,
        recent_matches: int = 5,
    ) -> Optional[PlayerProfile]:
        """Fold a newest-first match history into a profile; ``None`` if the player has no rows."""
        roster_by_puuid: Dict[str, Summoner] = {s.puuid: s for s in roster}
        totals = _Totals()
        wins = losses = total_matches = undecided = 0
        champion_table = FrequencyTable()
        position_table = FrequencyTable()
        by_champion: Dict[str, _SplitRecord] = {}
        by_position: Dict[str, _SplitRecord] = {}
        teammates: Dict[str, _TeammateRecord] = {}
        latest_row: Optional[MatchPlayer] = None

        for match in history:
            me = match.find_player(puuid)
            if me is None:
                continue
            latest_row = latest_row or me
            won = match.outcome_for(me)
            total_matches += 1
            if won is True:
                wins += 1
            elif won is False:
                losses += 1
            else:
                undecided += 1
            totals.add(me)

            champion_table.add(me.champion_name)
            champ = by_champion.setdefault(me.champion_name, _SplitRecord())
            champ.games += 1
            champ.wins += won is True
            champ.kills += me.kills
            champ.deaths += me.deaths
            champ.assists += me.assists

            position_table.add(me.position)
            pos = by_position.setdefault(me.position, _SplitRecord())
            pos.games += 1
            pos.wins += won is True

            for other in match.players:
                if other.puuid == puuid or other.puuid not in roster_by_puuid:
                    continue
                mate = teammates.setdefault(other.puuid, _TeammateRecord())
                mate.games_played += 1
                mate.kills += other.kills
                mate.deaths += other.deaths
                mate.assists += other.assists
                mate.mvp_score += other.mvp_score
                if me.team_id is not None and other.team_id == me.team_id:
                    if won is True:
                        mate.wins += 1
                    elif won is False:
                        mate.losses += 1

        if total_matches == 0 or latest_row is None:
            return None
        if undecided:
            logger.warning(lambda: f"profile-undecided-matches count={undecided}", extra={"puuid": puuid})

        def avg(value: float) -> float:
            return average(value, total_matches, _AVG_DIGITS)

        champions = [
            ChampionStats(
                champion=name,
                games=rec.games,
                win_rate=percentage(rec.wins, rec.games),
                average_kills=average(rec.kills, rec.games, _AVG_DIGITS),
                average_deaths=average(rec.deaths, rec.games, _AVG_DIGITS),
                average_assists=average(rec.assists, rec.games, _AVG_DIGITS),
            )
            for name, rec in ((n, by_champion[n]) for n, _ in champion_table.most_common(top_champions))
        ]
        positions = [
            PositionStats(position=name, games=games, win_rate=percentage(by_position[name].wins, games))
            for name, games in position_table.most_common()
        ]
        teammate_stats: List[TeammateStats] = [
            TeammateStats(
                puuid=mate_puuid,
                summoner_name=roster_by_puuid[mate_puuid].display_name,
                real_name=roster_by_puuid[mate_puuid].real_name,
                games_played=rec.games_played,
                wins=rec.wins,
                losses=rec.losses,
                win_rate=percentage(rec.wins, rec.games_played),
                average_kills=average(rec.kills, rec.games_played, _AVG_DIGITS),
                average_deaths=average(rec.deaths, rec.games_played, _AVG_DIGITS),
                average_assists=average(rec.assists, rec.games_played, _AVG_DIGITS),
                average_mvp_score=average(rec.mvp_score, rec.games_played, _AVG_DIGITS),
            )
            for mate_puuid, rec in teammates.items()
        ]
        teammate_stats.sort(key=lambda t: -t.games_played)

        me_in_roster = roster_by_puuid.get(puuid)
        return PlayerProfile(
            puuid=puuid,
            summoner_name=(me_in_roster.display_name if me_in_roster else "") or latest_row.summoner_name,
            real_name=(me_in_roster.real_name if me_in_roster else "") or latest_row.real_name,
            total_matches=total_matches,
            wins=wins,
            losses=losses,
            win_rate=percentage(wins, total_matches),
            average_kills=avg(totals.kills),
            average_deaths=avg(totals.deaths),
            average_assists=avg(totals.assists),
            average_mvp_score=avg(totals.mvp_score),
            average_damage_dealt=avg(totals.damage_dealt),
            average_damage_to_champions=avg(totals.damage_to_champions),
            average_gold_earned=avg(totals.gold_earned),
            average_vision_score=avg(totals.vision_score),
            average_wards_placed=avg(totals.wards_placed),
            average_wards_killed=avg(totals.wards_killed),
            average_pings=avg(totals.pings),
            average_danger_pings=avg(totals.danger_pings),
            average_on_my_way_pings=avg(totals.on_my_way_pings),
            average_enemy_missing_pings=avg(totals.enemy_missing_pings),
            most_played_champions=champions,
            most_played_positions=positions,
            teammates_stats=teammate_stats,
            recent_matches=list(history[:recent_matches]),
        )
