"""Team entity representing one side of a match."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Team:
    """A team row (100 = blue, 200 = red).

    ``win`` is ``None`` when the stored document did not say. Objectives,
    bans and the rest stay in ``document``, which ``to_dict`` hands back as
    stored.
    """

    team_id: Optional[int]
    win: Optional[bool]
    document: Optional[Dict[str, Any]] = None

    def to_dict(self) -> dict:
        if self.document is not None:
            return dict(self.document)
        return {'team_id': self.team_id, 'win': self.win}
