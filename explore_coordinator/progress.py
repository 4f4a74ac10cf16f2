"""
progress.py

Per-agent stall detection.

Each planning pass reports the candidate selected for the agent. Progress
counts when the target moved (a different goal) or when the candidate's
min_distance shrank. If neither happened for longer than the timeout the
goal is reported STALLED and the caller blacklists it.
"""

import enum
from typing import Optional

from .geometry import Candidate, Point2D, point_match


class ProgressStatus(enum.Enum):
    NEW_GOAL = 'new_goal'
    PROGRESSING = 'progressing'
    WAITING = 'waiting'
    STALLED = 'stalled'


class ProgressTracker:
    def __init__(self, timeout: float, goal_tolerance: float = 0.01):
        self.timeout = timeout
        self.goal_tolerance = goal_tolerance
        self.previous_goal: Optional[Point2D] = None
        self.last_progress_time: Optional[float] = None
        self.last_known_distance = 0.0

    def observe(self, candidate: Candidate, now: float) -> ProgressStatus:
        target = candidate.centroid
        same_goal = (self.previous_goal is not None and
                     point_match(self.previous_goal, target,
                                 self.goal_tolerance))
        self.previous_goal = target

        if not same_goal:
            self._mark(candidate, now)
            return ProgressStatus.NEW_GOAL

        if candidate.min_distance < self.last_known_distance:
            self._mark(candidate, now)
            return ProgressStatus.PROGRESSING

        if now - self.last_progress_time > self.timeout:
            return ProgressStatus.STALLED
        return ProgressStatus.WAITING

    def _mark(self, candidate: Candidate, now: float):
        self.last_progress_time = now
        self.last_known_distance = candidate.min_distance

    def reset(self):
        """Forget the goal; the next observation starts a fresh window."""
        self.previous_goal = None
        self.last_progress_time = None
        self.last_known_distance = 0.0

    def stalled_for(self, now: float) -> float:
        if self.last_progress_time is None:
            return 0.0
        return now - self.last_progress_time
