"""
params.py

Startup tunables. The node fills this from ROS parameters; tests build it
directly. Nothing here is reconfigured at runtime.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ExploreParams:
    robot_namespaces: List[str] = field(default_factory=lambda: ['d1', 'd2'])
    planner_frequency: float = 1.0
    progress_timeout: float = 30.0
    # 5 cells of a 0.05 m grid
    blacklist_tolerance: float = 0.25
    goal_match_tolerance: float = 0.01
    boundary_epsilon: float = 3.0
    exploration_boundary: List[float] = field(default_factory=list)
    visualize: bool = False
    potential_scale: float = 1e-3
    gain_scale: float = 1.0
    min_frontier_size: float = 0.0
    global_frame: str = 'map'
    frontier_topic: str = 'frontiers/list'
    odom_topic: str = 'odom'
    navigate_action: str = 'navigate_to_pose'

    @property
    def planner_period(self) -> float:
        return 1.0 / self.planner_frequency

    def validate(self):
        """Raise ValueError on settings the planner cannot run with."""
        if not self.robot_namespaces:
            raise ValueError('robot_namespaces must name at least one robot')
        if len(set(self.robot_namespaces)) != len(self.robot_namespaces):
            raise ValueError(
                f'robot_namespaces contains duplicates: {self.robot_namespaces}')
        if self.planner_frequency <= 0.0:
            raise ValueError(
                f'planner_frequency must be > 0, got {self.planner_frequency}')
        for name in ('progress_timeout', 'blacklist_tolerance',
                     'goal_match_tolerance', 'boundary_epsilon',
                     'min_frontier_size'):
            if getattr(self, name) < 0.0:
                raise ValueError(f'{name} must be >= 0, got {getattr(self, name)}')
        n = len(self.exploration_boundary)
        if n % 2 or n < 6:
            raise ValueError(
                'exploration_boundary must be a flat [x1, y1, x2, y2, ...] '
                f'list of at least 3 vertices, got {n} values')
        return self
