"""Translation between stored documents and domain entities.

This is the only place that knows about historical field-name drift in the
store (``teamId`` vs ``team_id``, ``summoner_name`` vs ``display_name``); the
services only ever see the canonical entities. Entities keep the stored
document, so responses go out in the shape the writer stored.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from domain.entities import Match, MatchPlayer, Summoner, Team, format_timestamp

_PLAYER_NUMERIC_FIELDS = (
    'total_dmg_dealt',
    'total_dmg_dealt_champions',
    'gold_earned',
    'vision_score',
    'wards_placed',
    'wards_killed',
)
_PLAYER_KNOWN_FIELDS = frozenset((
    'puuid', 'summoner_name', 'real_name', 'champion_name', 'position',
    'team_id', 'teamId', 'kills', 'deaths', 'assists', 'mvp_score',
) + _PLAYER_NUMERIC_FIELDS)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_int(value: Any) -> int:
    if not _is_number(value):
        return 0
    return int(value)


def _as_number(value: Any) -> float:
    return value if _is_number(value) else 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _team_id(data: Dict[str, Any]) -> Optional[int]:
    value = data.get('team_id', data.get('teamId'))
    return int(value) if _is_number(value) else None


def parse_player_data(data: Dict[str, Any]) -> MatchPlayer:
    """Parse a stored player row; missing numbers read as 0, missing strings as ''."""
    mvp = data.get('mvp_score')
    return MatchPlayer(
        puuid=_as_str(data.get('puuid')),
        summoner_name=_as_str(data.get('summoner_name')),
        real_name=_as_str(data.get('real_name')),
        champion_name=_as_str(data.get('champion_name')),
        position=_as_str(data.get('position')),
        team_id=_team_id(data),
        kills=_as_int(data.get('kills')),
        deaths=_as_int(data.get('deaths')),
        assists=_as_int(data.get('assists')),
        mvp_score=float(mvp) if _is_number(mvp) else 0.0,
        **{name: _as_number(data.get(name)) for name in _PLAYER_NUMERIC_FIELDS},
        extra={k: v for k, v in data.items() if k not in _PLAYER_KNOWN_FIELDS},
        document=dict(data),
    )


def parse_team_data(data: Dict[str, Any]) -> Team:
    """Parse a stored team row. ``win`` stays ``None`` unless the row holds a real bool."""
    win = data.get('win')
    return Team(
        team_id=_team_id(data),
        win=win if isinstance(win, bool) else None,
        document=dict(data),
    )


def parse_match_data(data: Dict[str, Any]) -> Match:
    """Parse a stored match document.

    The document itself is kept for serialisation, minus the store's ``_id``.
    A BSON date timestamp is kept in its wire form (``...T18:04:05.123Z``).
    """
    document = {k: v for k, v in data.items() if k != '_id'}
    timestamp = data.get('timestamp')
    if isinstance(timestamp, datetime):
        timestamp = format_timestamp(timestamp)
        document['timestamp'] = timestamp
    teams = data.get('teams')
    players = data.get('players')
    if isinstance(players, dict):
        # a document coming out of an $unwind stage
        players = [players]
    return Match(
        match_id=_as_str(data.get('match_id')),
        timestamp=_as_str(timestamp),
        game_duration_seconds=_as_int(data.get('game_duration_seconds')),
        queue_id=_as_int(data.get('queue_id')),
        teams=[parse_team_data(t) for t in teams if isinstance(t, dict)] if isinstance(teams, list) else [],
        players=[parse_player_data(p) for p in players if isinstance(p, dict)] if isinstance(players, list) else [],
        document=document,
    )


def parse_summoner_data(data: Dict[str, Any]) -> Summoner:
    return Summoner(
        puuid=_as_str(data.get('puuid')),
        display_name=_as_str(data.get('display_name') or data.get('summoner_name')),
        real_name=_as_str(data.get('real_name')),
    )
