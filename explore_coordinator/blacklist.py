"""
blacklist.py

GoalBlacklist — goals that were aborted or stalled, kept for the whole run.
CycleClaimSet — goals handed out during the current planning tick only.

Both match with an axis-aligned box (|dx| < tol and |dy| < tol) against
every stored entry individually. There is no merging of nearby entries:
two points that each match a third entry need not match each other.
"""

from typing import Iterable, List

from .geometry import Point2D, box_match


class GoalBlacklist:
    def __init__(self, tolerance: float):
        self.tolerance = tolerance
        self._entries: List[Point2D] = []

    def add(self, point: Point2D):
        self._entries.append(point)

    def contains(self, point: Point2D) -> bool:
        return any(box_match(point, e, self.tolerance) for e in self._entries)

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._entries)


class CycleClaimSet:
    """Targets already claimed by agents earlier in the same tick."""

    def __init__(self, tolerance: float, seed: Iterable[Point2D] = ()):
        self.tolerance = tolerance
        self._claims: List[Point2D] = list(seed)

    def claim(self, point: Point2D):
        self._claims.append(point)

    def contains(self, point: Point2D) -> bool:
        return any(box_match(point, c, self.tolerance) for c in self._claims)

    __contains__ = contains

    def __len__(self) -> int:
        return len(self._claims)
