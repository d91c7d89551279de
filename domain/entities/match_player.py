"""MatchPlayer entity: one participant row embedded in a match."""
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class MatchPlayer:
    """A participant's box score.

    Only the fields the aggregation layer reads are modelled explicitly; the
    long tail of counters (items, pings, multi-kills, ...) stays in ``extra``.
    ``document`` is the row as stored and is what ``to_dict`` returns.
    """

    # Identity
    puuid: str
    summoner_name: str = ""
    real_name: str = ""

    # Match context
    champion_name: str = ""
    position: str = ""
    team_id: Optional[int] = None

    # Combat
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    # Set only on rows of tracked roster members
    mvp_score: float = 0.0

    # Damage, gold & vision
    total_dmg_dealt: float = 0
    total_dmg_dealt_champions: float = 0
    gold_earned: float = 0
    vision_score: float = 0
    wards_placed: float = 0
    wards_killed: float = 0

    extra: Dict[str, Any] = field(default_factory=dict)
    document: Optional[Dict[str, Any]] = None

    @property
    def is_tracked(self) -> bool:
        """A positive MVP score is what marks a row as one of ours."""
        return self.mvp_score > 0

    @property
    def kda(self) -> float:
        return (self.kills + self.assists) / max(self.deaths, 1)

    def stat(self, name: str) -> float:
        """Numeric counter by stored name; missing or non-numeric values read as 0."""
        if name in self.__dataclass_fields__ and name not in ("extra", "document"):
            value = getattr(self, name)
        else:
            value = self.extra.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return value

    @property
    def total_pings(self) -> float:
        return sum(self.stat(key) for key in self.extra if key.endswith("_pings"))

    def relabel(self, summoner_name: str, real_name: str) -> "MatchPlayer":
        """Copy carrying live roster names; empty names leave the stored ones alone."""
        names = {k: v for k, v in (('summoner_name', summoner_name), ('real_name', real_name)) if v}
        if not names:
            return self
        document = None if self.document is None else {**self.document, **names}
        return dataclasses.replace(self, document=document, **names)

    def to_dict(self) -> dict:
        if self.document is not None:
            return dict(self.document)
        data = dict(self.extra)
        data.update({
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'real_name': self.real_name,
            'champion_name': self.champion_name,
            'position': self.position,
            'team_id': self.team_id,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'mvp_score': self.mvp_score,
            'total_dmg_dealt': self.total_dmg_dealt,
            'total_dmg_dealt_champions': self.total_dmg_dealt_champions,
            'gold_earned': self.gold_earned,
            'vision_score': self.vision_score,
            'wards_placed': self.wards_placed,
            'wards_killed': self.wards_killed,
        })
        return data
