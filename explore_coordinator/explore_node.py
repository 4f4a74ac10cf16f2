"""
explore_node.py  (singleton — one instance for all robots)

Multi-robot frontier exploration. Every planning tick picks, for each
connected robot, the cheapest frontier inside the exploration boundary that
is neither blacklisted nor already claimed by another robot this tick, and
sends it to that robot's Nav2 stack. Goals the robot makes no progress on
within progress_timeout, and goals that Nav2 aborts, are blacklisted.

Subscribed
  /{ns}/frontiers/list          drone_interfaces/FrontierList  (per robot)
  /{ns}/odom                    nav_msgs/Odometry              (per robot)

Action clients
  /{ns}/navigate_to_pose        nav2_msgs/NavigateToPose

Published (visualize:=true)
  /{ns}/frontiers               visualization_msgs/MarkerArray
  /{ns}/exploration_boundary    visualization_msgs/Marker
"""

import sys

import rclpy
from rclpy.callback_groups import MutuallyExclusiveCallbackGroup, ReentrantCallbackGroup
from rclpy.exceptions import ParameterUninitializedException
from rclpy.logging import get_logger
from rclpy.node import Node
from rclpy.parameter import Parameter

from .arbitrator import ExplorationContext, GoalArbitrator
from .params import ExploreParams
from .ros_adapters import NavigateToPoseAdapter, TopicFrontierSource
from .scheduler import PlanningScheduler
from .visualization import MarkerVisualizer


class ExploreNode(Node):
    def __init__(self):
        super().__init__('explore')

        defaults = ExploreParams()
        self.declare_parameter('robot_namespaces', defaults.robot_namespaces)
        self.declare_parameter('planner_frequency', defaults.planner_frequency)
        self.declare_parameter('progress_timeout', defaults.progress_timeout)
        self.declare_parameter('blacklist_tolerance', defaults.blacklist_tolerance)
        self.declare_parameter('goal_match_tolerance', defaults.goal_match_tolerance)
        self.declare_parameter('boundary_epsilon', defaults.boundary_epsilon)
        self.declare_parameter('exploration_boundary', Parameter.Type.DOUBLE_ARRAY)
        self.declare_parameter('visualize', defaults.visualize)
        self.declare_parameter('potential_scale', defaults.potential_scale)
        self.declare_parameter('gain_scale', defaults.gain_scale)
        self.declare_parameter('min_frontier_size', defaults.min_frontier_size)
        self.declare_parameter('global_frame', defaults.global_frame)
        self.declare_parameter('frontier_topic', defaults.frontier_topic)
        self.declare_parameter('odom_topic', defaults.odom_topic)
        self.declare_parameter('navigate_action', defaults.navigate_action)

        boundary = self.get_parameter('exploration_boundary').value
        self._params = ExploreParams(
            robot_namespaces=list(self.get_parameter('robot_namespaces').value),
            planner_frequency=self.get_parameter('planner_frequency').value,
            progress_timeout=self.get_parameter('progress_timeout').value,
            blacklist_tolerance=self.get_parameter('blacklist_tolerance').value,
            goal_match_tolerance=self.get_parameter('goal_match_tolerance').value,
            boundary_epsilon=self.get_parameter('boundary_epsilon').value,
            exploration_boundary=list(boundary) if boundary is not None else [],
            visualize=self.get_parameter('visualize').value,
            potential_scale=self.get_parameter('potential_scale').value,
            gain_scale=self.get_parameter('gain_scale').value,
            min_frontier_size=self.get_parameter('min_frontier_size').value,
            global_frame=self.get_parameter('global_frame').value,
            frontier_topic=self.get_parameter('frontier_topic').value,
            odom_topic=self.get_parameter('odom_topic').value,
            navigate_action=self.get_parameter('navigate_action').value,
        ).validate()
        p = self._params

        # Timer and wakeup share one exclusive group: ticks never overlap.
        # Action results land in a separate group and only enqueue.
        planning_cbg = MutuallyExclusiveCallbackGroup()
        result_cbg = ReentrantCallbackGroup()

        adapters = {
            ns: NavigateToPoseAdapter(self, ns, p.navigate_action,
                                      p.global_frame, callback_group=result_cbg)
            for ns in p.robot_namespaces
        }
        self._context = ExplorationContext.from_params(
            p, adapters, clock=lambda: self.get_clock().now().nanoseconds * 1e-9)

        source = TopicFrontierSource(
            self, p.robot_namespaces, p.frontier_topic, p.odom_topic,
            p.potential_scale, p.gain_scale, p.min_frontier_size)

        visualizer = None
        if p.visualize:
            visualizer = MarkerVisualizer(self, p.robot_namespaces, p.global_frame)
            visualizer.publish_boundary(self._context.boundary.vertices)

        arbitrator = GoalArbitrator(
            self._context, source, visualizer,
            logger=self.get_logger().get_child('arbitrator'))

        self._wakeup = self.create_guard_condition(
            self._on_wakeup, callback_group=planning_cbg)
        self.scheduler = PlanningScheduler(
            self._context, arbitrator, p.planner_period,
            wakeup=self._wakeup.trigger,
            logger=self.get_logger().get_child('scheduler'))

        self.create_timer(p.planner_period, self.scheduler.on_timer,
                          callback_group=planning_cbg)
        self.scheduler.start()

        self.get_logger().info(
            f'[explore] managing {p.robot_namespaces} at {p.planner_frequency:.2f} Hz, '
            f'boundary {self._context.boundary}')

    def _on_wakeup(self):
        self.scheduler.on_wakeup()


def main():
    rclpy.init()
    try:
        node = ExploreNode()
    except (ValueError, ParameterUninitializedException) as e:
        # covers BoundaryConfigError and an unset exploration_boundary:
        # no safe filtering without a valid region
        get_logger('explore').fatal(f'[explore] refusing to start: {e}')
        rclpy.shutdown()
        sys.exit(1)
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.scheduler.stop()
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
