"""
agent.py

AgentAdapter is the capability the planner needs from one robot's motion
layer; AgentSlot is the planner-side state kept for that robot.
"""

import enum
from typing import Callable, Optional, Protocol

from .geometry import Point2D, point_match
from .progress import ProgressTracker


class GoalOutcome(enum.Enum):
    SUCCEEDED = 'succeeded'
    ABORTED = 'aborted'
    REJECTED = 'rejected'
    PREEMPTED = 'preempted'
    OTHER = 'other'

    @property
    def is_failure(self) -> bool:
        """Outcomes that mark the target unreachable."""
        return self in (GoalOutcome.ABORTED, GoalOutcome.REJECTED)


ResultCallback = Callable[[GoalOutcome, Point2D], None]


class AgentAdapter(Protocol):
    def is_connected(self) -> bool:
        ...

    def submit_goal(self, point: Point2D, on_result: ResultCallback) -> None:
        """Fire-and-forget. ``on_result`` is called exactly once, later."""
        ...

    def cancel_all(self) -> None:
        ...


class AgentSlot:
    """Everything the planner owns for one agent."""

    def __init__(self, name: str, adapter: AgentAdapter,
                 tracker: ProgressTracker):
        self.name = name
        self.adapter = adapter
        self.tracker = tracker
        self.current_goal: Optional[Point2D] = None
        self.connected = False

    def refresh_connection(self) -> bool:
        self.connected = bool(self.adapter.is_connected())
        return self.connected

    def is_current_goal(self, point: Point2D) -> bool:
        return (self.current_goal is not None and
                point_match(self.current_goal, point,
                            self.tracker.goal_tolerance))

    def halt(self):
        self.adapter.cancel_all()
        self.current_goal = None
        self.tracker.reset()

    def __repr__(self) -> str:
        return f'AgentSlot({self.name!r}, goal={self.current_goal})'
