"""
ros_adapters.py

rclpy transports behind the planner's AgentAdapter / FrontierSource seams.

NavigateToPoseAdapter  (one per robot)
  Action client   /{ns}/navigate_to_pose   nav2_msgs/NavigateToPose

TopicFrontierSource    (shared by all robots)
  Subscribed      /{ns}/frontiers/list     drone_interfaces/FrontierList
                  /{ns}/odom               nav_msgs/Odometry
  Frontiers from every robot's detector are merged, since all robots
  explore the same map. Each is scored against the asking robot's pose:
    cost = potential_scale * distance - gain_scale * size
"""

import math
import threading
from typing import Dict, List, Optional, Sequence

from rclpy.action import ActionClient
from rclpy.qos import QoSProfile, ReliabilityPolicy, DurabilityPolicy, HistoryPolicy

from action_msgs.msg import GoalStatus
from nav2_msgs.action import NavigateToPose
from nav_msgs.msg import Odometry
from drone_interfaces.msg import FrontierList

from .agent import GoalOutcome, ResultCallback
from .geometry import Candidate, Point2D

_STATUS_TO_OUTCOME = {
    GoalStatus.STATUS_SUCCEEDED: GoalOutcome.SUCCEEDED,
    GoalStatus.STATUS_ABORTED:   GoalOutcome.ABORTED,
    GoalStatus.STATUS_CANCELED:  GoalOutcome.PREEMPTED,
}


class NavigateToPoseAdapter:
    def __init__(self, node, ns: str, action_name: str, frame_id: str,
                 callback_group=None):
        self._node = node
        self._ns = ns
        self._frame_id = frame_id
        self._client = ActionClient(
            node, NavigateToPose, f'/{ns}/{action_name}',
            callback_group=callback_group)

        # goal seq → accepted goal handle still awaiting its result
        self._handles: Dict[int, object] = {}
        self._seq = 0
        self._active_seq: Optional[int] = None
        self._lock = threading.Lock()

    def is_connected(self) -> bool:
        return self._client.server_is_ready()

    def submit_goal(self, point: Point2D, on_result: ResultCallback):
        goal = NavigateToPose.Goal()
        goal.pose.header.frame_id = self._frame_id
        goal.pose.header.stamp = self._node.get_clock().now().to_msg()
        goal.pose.pose.position.x = float(point.x)
        goal.pose.pose.position.y = float(point.y)
        goal.pose.pose.orientation.w = 1.0

        with self._lock:
            self._seq += 1
            seq = self._seq
            self._active_seq = seq

        future = self._client.send_goal_async(goal)
        future.add_done_callback(
            lambda f, s=seq: self._goal_response(s, point, on_result, f))

    def cancel_all(self):
        with self._lock:
            self._active_seq = None
            handles = list(self._handles.values())
        for handle in handles:
            handle.cancel_goal_async()

    # ── Callbacks ──────────────────────────────────────────────────────────
    def _goal_response(self, seq: int, point: Point2D,
                       on_result: ResultCallback, future):
        try:
            handle = future.result()
        except Exception as e:
            self._node.get_logger().error(
                f'[{self._ns}] send goal {point} failed: {e}')
            on_result(GoalOutcome.OTHER, point)
            return

        if not handle.accepted:
            self._node.get_logger().warn(
                f'[{self._ns}] goal {point} rejected by navigation server')
            on_result(GoalOutcome.REJECTED, point)
            return

        with self._lock:
            self._handles[seq] = handle
            superseded = seq != self._active_seq
        if superseded:
            handle.cancel_goal_async()

        handle.get_result_async().add_done_callback(
            lambda f: self._result(seq, point, on_result, f))

    def _result(self, seq: int, point: Point2D,
                on_result: ResultCallback, future):
        try:
            status = future.result().status
        except Exception as e:
            self._node.get_logger().error(
                f'[{self._ns}] result for goal {point} failed: {e}')
            status = GoalStatus.STATUS_UNKNOWN

        with self._lock:
            self._handles.pop(seq, None)
            superseded = seq != self._active_seq
            if not superseded:
                self._active_seq = None

        outcome = _STATUS_TO_OUTCOME.get(status, GoalOutcome.OTHER)
        # the server aborts a goal it preempts; that says nothing about the target
        if superseded and outcome is not GoalOutcome.SUCCEEDED:
            outcome = GoalOutcome.PREEMPTED
        on_result(outcome, point)


class TopicFrontierSource:
    def __init__(self, node, namespaces: Sequence[str],
                 frontier_topic: str = 'frontiers/list',
                 odom_topic: str = 'odom',
                 potential_scale: float = 1e-3,
                 gain_scale: float = 1.0,
                 min_frontier_size: float = 0.0):
        self._potential_scale = potential_scale
        self._gain_scale = gain_scale
        self._min_size = min_frontier_size

        self._frontiers: Dict[str, FrontierList] = {}
        self._poses: Dict[str, Point2D] = {}

        # odometry is typically BEST_EFFORT — match it
        _best_effort_qos = QoSProfile(
            reliability=ReliabilityPolicy.BEST_EFFORT,
            durability=DurabilityPolicy.VOLATILE,
            history=HistoryPolicy.KEEP_LAST,
            depth=10,
        )
        for ns in namespaces:
            node.create_subscription(
                FrontierList, f'/{ns}/{frontier_topic}',
                lambda msg, n=ns: self._frontier_cb(n, msg), 10)
            node.create_subscription(
                Odometry, f'/{ns}/{odom_topic}',
                lambda msg, n=ns: self._odom_cb(n, msg), _best_effort_qos)

    def _frontier_cb(self, ns: str, msg: FrontierList):
        self._frontiers[ns] = msg

    def _odom_cb(self, ns: str, msg: Odometry):
        p = msg.pose.pose.position
        self._poses[ns] = Point2D(p.x, p.y)

    def agent_position(self, agent: str) -> Optional[Point2D]:
        return self._poses.get(agent)

    def rank(self, position: Point2D) -> List[Candidate]:
        candidates = []
        for fl in list(self._frontiers.values()):
            for centroid, size in zip(fl.centroids, fl.sizes):
                if size < self._min_size:
                    continue
                c = Point2D(centroid.x, centroid.y)
                d = math.hypot(c.x - position.x, c.y - position.y)
                cost = self._potential_scale * d - self._gain_scale * size
                candidates.append(Candidate(centroid=c, cost=cost,
                                            min_distance=d))
        candidates.sort(key=lambda c: c.cost)
        return candidates
