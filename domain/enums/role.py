"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """League of Legends lane roles/positions as stored in match rows."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"  # Support

    @property
    def display_name(self) -> str:
        """Label used in listings."""
        labels = {
            "TOP": "TOP",
            "JUNGLE": "JUNGLE",
            "MIDDLE": "MID",
            "BOTTOM": "ADC",
            "UTILITY": "SUPPORT",
        }
        return labels[self.value]

    @classmethod
    def from_string(cls, role_str: Optional[str]) -> Optional['Role']:
        """Parse a stored or user-typed position; ``None`` when it is empty or unknown."""
        if not role_str or not role_str.strip():
            return None
        key = role_str.strip().upper()
        try:
            return cls[key]
        except KeyError:
            aliases = {
                "SUPPORT": cls.UTILITY,
                "SUP": cls.UTILITY,
                "ADC": cls.BOTTOM,
                "BOT": cls.BOTTOM,
                "MID": cls.MIDDLE,
                "JG": cls.JUNGLE,
                "JUNGLER": cls.JUNGLE,
            }
            return aliases.get(key)

    @classmethod
    def display(cls, role_str: Optional[str]) -> str:
        """Display label for any stored position string."""
        role = cls.from_string(role_str)
        if role is not None:
            return role.display_name
        return role_str.strip() if role_str and role_str.strip() else "UNKNOWN"
