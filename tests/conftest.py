from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from domain.entities import format_timestamp
from infrastructure.repositories import InMemoryMatchRepository, InMemorySummonerRepository

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def days_ago(days: float) -> str:
    return format_timestamp(NOW - timedelta(days=days))


def player_doc(
    puuid: str,
    *,
    champion: str = "Ahri",
    position: str = "MIDDLE",
    team_id: Optional[int] = 100,
    kills: int = 5,
    deaths: int = 2,
    assists: int = 7,
    mvp_score: float = 6.5,
    name: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    doc = {
        "puuid": puuid,
        "summoner_name": name if name is not None else f"{puuid}-name",
        "champion_name": champion,
        "position": position,
        "team_id": team_id,
        "kills": kills,
        "deaths": deaths,
        "assists": assists,
        "mvp_score": mvp_score,
    }
    doc.update(extra)
    return doc


def match_doc(
    match_id: str,
    players: List[Dict[str, Any]],
    *,
    timestamp: Optional[str] = None,
    winner: Optional[int] = 100,
    queue_id: int = 420,
    duration: int = 1800,
) -> Dict[str, Any]:
    return {
        "match_id": match_id,
        "timestamp": timestamp if timestamp is not None else days_ago(1),
        "game_duration_seconds": duration,
        "queue_id": queue_id,
        "teams": [
            {"team_id": 100, "win": winner == 100},
            {"team_id": 200, "win": winner == 200},
        ],
        "players": players,
    }


def summoner_doc(puuid: str, display_name: str, real_name: str = "") -> Dict[str, Any]:
    return {"puuid": puuid, "display_name": display_name, "real_name": real_name}


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def make_repos():
    def _make(matches=(), summoners=(), max_page_size: int = 50):
        return (
            InMemoryMatchRepository(matches, max_page_size=max_page_size),
            InMemorySummonerRepository(summoners),
        )
    return _make
