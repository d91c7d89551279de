"""Summoner entity: one member of the tracked roster."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Summoner:
    """Roster identity. Managed out-of-band; read-only here."""

    puuid: str
    display_name: str = ""
    real_name: str = ""

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.display_name,
            'real_name': self.real_name,
        }
