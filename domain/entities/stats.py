"""Result records produced by the aggregation services.

Field names in ``to_dict`` are the wire names the presentation layer reads,
which is why the leaderboard and winrate records are camelCase while the
profile is snake_case.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .match import Match


@dataclass(frozen=True)
class WinrateStats:
    overall_winrate: float = 0.0
    champion_winrate: float = 0.0
    position_winrate: float = 0.0
    total_games: int = 0
    champion_games: int = 0
    position_games: int = 0

    def to_dict(self) -> dict:
        return {
            'championWinrate': self.champion_winrate,
            'overallWinrate': self.overall_winrate,
            'positionWinrate': self.position_winrate,
            'totalGames': self.total_games,
            'championGames': self.champion_games,
            'positionGames': self.position_games,
        }


@dataclass(frozen=True)
class AverageKDA:
    kills: float = 0.0
    deaths: float = 0.0
    assists: float = 0.0

    @property
    def ratio(self) -> float:
        return (self.kills + self.assists) / max(self.deaths, 1)

    def to_dict(self) -> dict:
        return {'kills': self.kills, 'deaths': self.deaths, 'assists': self.assists}


@dataclass(frozen=True)
class LeaderboardEntry:
    puuid: str
    summoner_name: str
    real_name: str
    total_matches: int
    win_rate: float
    average_kda: AverageKDA
    most_played_champion: Optional[str]
    main_role: Optional[str]

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'real_name': self.real_name,
            'totalMatches': self.total_matches,
            'winRate': self.win_rate,
            'averageKDA': self.average_kda.to_dict(),
            'mostPlayedChampion': self.most_played_champion,
            'mainRole': self.main_role,
        }


@dataclass(frozen=True)
class ChampionStats:
    champion: str
    games: int
    win_rate: float
    average_kills: float
    average_deaths: float
    average_assists: float

    def to_dict(self) -> dict:
        return {
            'champion': self.champion,
            'games': self.games,
            'win_rate': self.win_rate,
            'average_kills': self.average_kills,
            'average_deaths': self.average_deaths,
            'average_assists': self.average_assists,
        }


@dataclass(frozen=True)
class PositionStats:
    position: str
    games: int
    win_rate: float

    def to_dict(self) -> dict:
        return {'position': self.position, 'games': self.games, 'win_rate': self.win_rate}


@dataclass(frozen=True)
class TeammateStats:
    puuid: str
    summoner_name: str
    real_name: str
    games_played: int
    wins: int
    losses: int
    win_rate: float
    average_kills: float
    average_deaths: float
    average_assists: float
    average_mvp_score: float

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'real_name': self.real_name,
            'games_played': self.games_played,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
            'average_kills': self.average_kills,
            'average_deaths': self.average_deaths,
            'average_assists': self.average_assists,
            'average_mvp_score': self.average_mvp_score,
        }


@dataclass(frozen=True)
class PlayerProfile:
    puuid: str
    summoner_name: str
    real_name: str
    total_matches: int
    wins: int
    losses: int
    win_rate: float
    average_kills: float
    average_deaths: float
    average_assists: float
    average_mvp_score: float
    average_damage_dealt: float
    average_damage_to_champions: float
    average_gold_earned: float
    average_vision_score: float
    average_wards_placed: float
    average_wards_killed: float
    average_pings: float
    average_danger_pings: float
    average_on_my_way_pings: float
    average_enemy_missing_pings: float
    most_played_champions: List[ChampionStats] = field(default_factory=list)
    most_played_positions: List[PositionStats] = field(default_factory=list)
    teammates_stats: List[TeammateStats] = field(default_factory=list)
    recent_matches: List[Match] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'real_name': self.real_name,
            'total_matches': self.total_matches,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
            'average_kills': self.average_kills,
            'average_deaths': self.average_deaths,
            'average_assists': self.average_assists,
            'average_mvp_score': self.average_mvp_score,
            'average_damage_dealt': self.average_damage_dealt,
            'average_damage_to_champions': self.average_damage_to_champions,
            'average_gold_earned': self.average_gold_earned,
            'average_vision_score': self.average_vision_score,
            'average_wards_placed': self.average_wards_placed,
            'average_wards_killed': self.average_wards_killed,
            'average_pings': self.average_pings,
            'average_danger_pings': self.average_danger_pings,
            'average_on_my_way_pings': self.average_on_my_way_pings,
            'average_enemy_missing_pings': self.average_enemy_missing_pings,
            'most_played_champions': [c.to_dict() for c in self.most_played_champions],
            'most_played_positions': [p.to_dict() for p in self.most_played_positions],
            'teammates_stats': [t.to_dict() for t in self.teammates_stats],
            'recent_matches': [m.to_dict() for m in self.recent_matches],
        }


@dataclass(frozen=True)
class MatchPage:
    """One page of the recent-matches listing."""

    items: List[Match]
    total_count: int
    tracked_last_week: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    def pagination_dict(self) -> dict:
        return {
            'page': self.page,
            'limit': self.page_size,
            'total': self.total_count,
            'totalPages': self.total_pages,
            'trackedLastWeek': self.tracked_last_week,
        }
