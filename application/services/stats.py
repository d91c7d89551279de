"""Small numeric helpers shared by the aggregation services."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like ``Math.round(x * 10) / 10``: halves go up, not to even."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def average(total: float, count: int, digits: int = 1) -> float:
    if count <= 0:
        return 0.0
    return round_half_up(total / count, digits)


def percentage(part: int, whole: int) -> float:
    """``100 * part / whole`` to one decimal; 0.0 when ``whole`` is 0."""
    if whole <= 0:
        return 0.0
    return round_half_up(100.0 * part / whole, 1)


class FrequencyTable:
    """Play counts per key.

    Ranking is by count, descending. Equal counts keep the order in which
    the keys were first seen.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def add(self, key: str) -> None:
        self._counts[key] = self._counts.get(key, 0) + 1

    def count(self, key: str) -> int:
        return self._counts.get(key, 0)

    def most_common(self, n: Optional[int] = None) -> List[Tuple[str, int]]:
        ranked = sorted(self._counts.items(), key=lambda kv: -kv[1])
        return ranked if n is None else ranked[:n]

    def top(self) -> Optional[str]:
        ranked = self.most_common(1)
        return ranked[0][0] if ranked else None

    def __len__(self) -> int:
        return len(self._counts)
