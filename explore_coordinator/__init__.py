"""Frontier goal assignment for a fleet of exploring robots.

The planning core below has no ROS dependency; the rclpy node lives in
``explore_coordinator.explore_node``.
"""

from .agent import AgentAdapter, AgentSlot, GoalOutcome
from .arbitrator import ExplorationContext, GoalArbitrator, PlanDecision
from .blacklist import CycleClaimSet, GoalBlacklist
from .boundary import BoundaryConfigError, ExplorationBoundary
from .geometry import Candidate, Point2D
from .params import ExploreParams
from .progress import ProgressStatus, ProgressTracker
from .scheduler import PlanningScheduler
