"""Query endpoints consumed by the match-history pages."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from application.services import ServiceContainer
from config import settings
from core.logging.context import bind
from domain.exceptions import RepositoryUnavailableError

router = APIRouter()


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def _parse_int(value: Optional[str], default: int) -> int:
    """Lenient integer parsing for query strings; junk falls back to ``default``."""
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


@router.get("/health")
async def health(services: ServiceContainer = Depends(get_services)):
    try:
        ok = await services.match_repository.ping()
    except RepositoryUnavailableError:
        ok = False
    if not ok:
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}


@router.get("/api/matches")
async def get_matches(
    matchId: Optional[str] = None,
    playerPuuid: Optional[str] = None,
    limit: Optional[str] = None,
    page: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    if matchId:
        bind(match_id=matchId)
        match = await services.matches.match(matchId)
        return {"matches": [match.to_dict()]}

    if playerPuuid:
        bind(puuid=playerPuuid)
        matches = await services.matches.matches_for_player(playerPuuid)
        return {"matches": [m.to_dict() for m in matches]}

    result = await services.matches.recent_matches_page(
        _parse_int(limit, settings.DEFAULT_PAGE_SIZE),
        _parse_int(page, 1),
    )
    return {
        "matches": [m.to_dict() for m in result.items],
        "pagination": result.pagination_dict(),
    }


@router.get("/api/player/{puuid}")
async def get_player(puuid: str, services: ServiceContainer = Depends(get_services)):
    bind(puuid=puuid)
    profile = await services.profiles.profile(puuid)
    return {"profile": profile.to_dict()}


@router.get("/api/players")
async def get_players(services: ServiceContainer = Depends(get_services)):
    entries = await services.leaderboard.leaderboard()
    return {"players": [e.to_dict() for e in entries]}


@router.get("/api/summoner-stats/{puuid}")
async def get_summoner_stats(
    puuid: str,
    champion: Optional[str] = None,
    position: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    bind(puuid=puuid)
    stats = await services.winrate.winrate(puuid, champion or "", position or "")
    return stats.to_dict()
