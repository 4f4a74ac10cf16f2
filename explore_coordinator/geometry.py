"""
geometry.py

Plain map-frame value types shared by the planning core.

Two notions of "same place" are used:
  * box match   — independent per-axis threshold (blacklist, claim set)
  * point match — Euclidean radius (is this still the goal we sent?)
"""

import math
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def __str__(self) -> str:
        return f'({self.x:.2f}, {self.y:.2f})'


@dataclass(frozen=True)
class Candidate:
    """One scored frontier, as handed over by the frontier source."""
    centroid: Point2D
    cost: float
    min_distance: float
    support_points: Tuple[Point2D, ...] = field(default_factory=tuple)
    viewpoint: Point2D = None

    def __post_init__(self):
        # viewpoint defaults to the centroid when the source has none
        if self.viewpoint is None:
            object.__setattr__(self, 'viewpoint', self.centroid)
        if not isinstance(self.support_points, tuple):
            object.__setattr__(self, 'support_points',
                               tuple(self.support_points))


def box_match(a: Point2D, b: Point2D, tolerance: float) -> bool:
    """Both axis differences strictly below ``tolerance``."""
    return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance


def point_match(a: Point2D, b: Point2D, tolerance: float) -> bool:
    return math.hypot(a.x - b.x, a.y - b.y) < tolerance
