"""Match entity representing one stored game."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .match_player import MatchPlayer
from .team import Team
from ..enums import QueueType


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format like the writer does: ``2025-01-31T18:04:05.123Z``."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


@dataclass
class Match:
    """One game, with both team rows and every participant row embedded.

    ``document`` is the stored document without the store's ``_id``.
    """

    match_id: str
    timestamp: str
    game_duration_seconds: int = 0
    queue_id: int = 0
    teams: List[Team] = field(default_factory=list)
    players: List[MatchPlayer] = field(default_factory=list)
    document: Optional[Dict[str, Any]] = None

    @property
    def played_at(self) -> Optional[datetime]:
        return parse_timestamp(self.timestamp)

    @property
    def game_type(self) -> str:
        return QueueType.label_for(self.queue_id)

    @property
    def winning_team_id(self) -> Optional[int]:
        """Id of the only team flagged as winner, or ``None`` if that is not exactly one team."""
        winners = [t.team_id for t in self.teams if t.win is True and t.team_id is not None]
        return winners[0] if len(winners) == 1 else None

    @property
    def tracked_players(self) -> List[MatchPlayer]:
        return [p for p in self.players if p.is_tracked]

    def find_player(self, puuid: str) -> Optional[MatchPlayer]:
        return next((p for p in self.players if p.puuid == puuid), None)

    def outcome_for(self, player: MatchPlayer) -> Optional[bool]:
        """Whether ``player``'s team won.

        ``None`` when it cannot be told: no single winner in ``teams`` or the
        player's team id does not match any team row.
        """
        winner = self.winning_team_id
        if winner is None or player.team_id is None:
            return None
        if player.team_id not in {t.team_id for t in self.teams}:
            return None
        return player.team_id == winner

    def with_players(self, players: List[MatchPlayer]) -> "Match":
        return dataclasses.replace(self, players=players)

    def to_dict(self) -> dict:
        """The stored document, with player rows as they currently stand (live names)."""
        if self.document is not None:
            data = dict(self.document)
            if isinstance(data.get('players'), list):
                data['players'] = [p.to_dict() for p in self.players]
            return data
        return {
            'match_id': self.match_id,
            'timestamp': self.timestamp,
            'game_duration_seconds': self.game_duration_seconds,
            'queue_id': self.queue_id,
            'teams': [t.to_dict() for t in self.teams],
            'players': [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True)
class PlayerMatchRow:
    """One match unwound to a single player's row, with the resolved outcome."""

    match: Match
    player: MatchPlayer
    won: Optional[bool]

    @classmethod
    def for_player(cls, match: Match, puuid: str) -> Optional["PlayerMatchRow"]:
        player = match.find_player(puuid)
        if player is None:
            return None
        return cls(match=match, player=player, won=match.outcome_for(player))
