"""Queue type enumeration."""
from enum import Enum
from typing import Optional


class QueueType(Enum):
    """Queues the tracker knows how to label.

    Unknown queue ids are valid in match documents; they just get the
    generic label.
    """

    NORMAL_DRAFT = 400
    RANKED_SOLO_5x5 = 420
    NORMAL_BLIND = 430
    RANKED_FLEX_SR = 440
    ARAM = 450
    CLASH = 700
    URF = 900
    ONE_FOR_ALL = 1020
    NEXUS_BLITZ = 1300
    ULTIMATE_SPELLBOOK = 1400

    @property
    def queue_id(self) -> int:
        return self.value

    @property
    def game_type(self) -> str:
        """Short label shown next to a match."""
        names = {
            400: "NORMAL",
            420: "RANKED DUO",
            430: "NORMAL",
            440: "RANKED FLEX",
            450: "ARAM",
            700: "CLASH",
            900: "URF",
            1020: "ONE FOR ALL",
            1300: "BLITZ",
            1400: "OTRO",
        }
        return names[self.value]

    @classmethod
    def from_queue_id(cls, queue_id: Optional[int]) -> Optional['QueueType']:
        try:
            return cls(queue_id)
        except ValueError:
            return None

    @classmethod
    def label_for(cls, queue_id: Optional[int]) -> str:
        queue = cls.from_queue_id(queue_id)
        return queue.game_type if queue else "OTRO"
