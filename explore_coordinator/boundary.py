"""
boundary.py

Exploration region filter.

The raw corner points are rounded outward (floor below zero, ceil above),
simplified with cv2.approxPolyDP and reduced to their axis-aligned bounding
rectangle. A frontier centroid is admitted iff it lies inside that rectangle,
edges included.
"""

import math
from typing import Iterable, Sequence

import numpy as np
import cv2

from .geometry import Point2D


class BoundaryConfigError(ValueError):
    """The configured exploration region cannot be used for filtering."""


def _round_outward(v: float) -> int:
    return math.floor(v) if v < 0 else math.ceil(v)


class ExplorationBoundary:
    def __init__(self, vertices: Sequence[Point2D], epsilon: float = 3.0):
        if len(vertices) < 3:
            raise BoundaryConfigError(
                f'exploration boundary needs at least 3 vertices, '
                f'got {len(vertices)}')
        if epsilon < 0.0:
            raise BoundaryConfigError(
                f'boundary simplification epsilon must be >= 0, got {epsilon}')
        for p in vertices:
            if not (math.isfinite(p.x) and math.isfinite(p.y)):
                raise BoundaryConfigError(f'non-finite boundary vertex {p}')

        self.vertices = tuple(vertices)

        contour = np.array(
            [[_round_outward(p.x), _round_outward(p.y)] for p in vertices],
            dtype=np.int32).reshape(-1, 1, 2)
        poly = cv2.approxPolyDP(contour, epsilon, True)
        x, y, w, h = cv2.boundingRect(poly)

        # boundingRect on integer points is inclusive: width = max - min + 1
        self.min_x = float(x)
        self.min_y = float(y)
        self.max_x = float(x + w - 1)
        self.max_y = float(y + h - 1)

        if self.max_x <= self.min_x or self.max_y <= self.min_y:
            raise BoundaryConfigError(
                f'degenerate exploration boundary: bounding box '
                f'[{self.min_x}, {self.max_x}] x [{self.min_y}, {self.max_y}]')

    @classmethod
    def from_flat(cls, coords: Iterable[float], epsilon: float = 3.0):
        """Build from ``[x1, y1, x2, y2, ...]`` as stored in a ROS parameter."""
        coords = list(coords)
        if len(coords) % 2:
            raise BoundaryConfigError(
                f'exploration boundary has an odd number of coordinates '
                f'({len(coords)})')
        pts = [Point2D(float(coords[i]), float(coords[i + 1]))
               for i in range(0, len(coords), 2)]
        return cls(pts, epsilon)

    def admits(self, point: Point2D) -> bool:
        return (self.min_x <= point.x <= self.max_x and
                self.min_y <= point.y <= self.max_y)

    def __repr__(self) -> str:
        return (f'ExplorationBoundary(x=[{self.min_x:g}, {self.max_x:g}], '
                f'y=[{self.min_y:g}, {self.max_y:g}])')
