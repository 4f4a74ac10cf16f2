"""
visualization.py

RViz markers for the planner. Purely informational.

Published (per robot)
  /{ns}/frontiers             visualization_msgs/MarkerArray
      ns 'frontiers': admissible candidates, red when blacklisted,
                      sphere size shrinks with cost
      ns 'goal':      the candidate chosen this tick
  /{ns}/exploration_boundary  visualization_msgs/Marker   (latched)
"""

from typing import Dict, Sequence

from rclpy.duration import Duration
from rclpy.qos import QoSProfile, DurabilityPolicy

from geometry_msgs.msg import Point
from std_msgs.msg import ColorRGBA
from visualization_msgs.msg import Marker, MarkerArray

from .blacklist import GoalBlacklist
from .geometry import Candidate, Point2D

_RED   = ColorRGBA(r=1.0, g=0.0, b=0.0, a=1.0)
_GREEN = ColorRGBA(r=0.0, g=1.0, b=0.0, a=1.0)
_BLUE  = ColorRGBA(r=0.0, g=0.0, b=1.0, a=1.0)


class MarkerVisualizer:
    def __init__(self, node, namespaces: Sequence[str], frame_id: str):
        self._node = node
        self._frame_id = frame_id
        self._pubs: Dict[str, object] = {}
        self._boundary_pubs: Dict[str, object] = {}
        self._last_count: Dict[str, int] = {}

        _latch = QoSProfile(depth=1, durability=DurabilityPolicy.TRANSIENT_LOCAL)
        for ns in namespaces:
            self._pubs[ns] = node.create_publisher(
                MarkerArray, f'/{ns}/frontiers', 10)
            self._boundary_pubs[ns] = node.create_publisher(
                Marker, f'/{ns}/exploration_boundary', _latch)
            self._last_count[ns] = 0

    def _marker(self, ns: str, marker_id: int, marker_type: int) -> Marker:
        m = Marker()
        m.header.frame_id = self._frame_id
        m.header.stamp    = self._node.get_clock().now().to_msg()
        m.ns              = ns
        m.id              = marker_id
        m.type            = marker_type
        m.action          = Marker.ADD
        m.lifetime        = Duration(seconds=0).to_msg()
        m.frame_locked    = True
        m.pose.orientation.w = 1.0
        return m

    def publish_boundary(self, vertices: Sequence[Point2D]):
        m = self._marker('exploration_boundary', 0, Marker.LINE_STRIP)
        m.scale.x = 0.1
        m.color   = _BLUE
        for p in list(vertices) + [vertices[0]]:
            m.points.append(Point(x=float(p.x), y=float(p.y), z=0.1))
        for pub in self._boundary_pubs.values():
            pub.publish(m)

    def show_frontiers(self, agent: str, candidates: Sequence[Candidate],
                       blacklist: GoalBlacklist):
        markers = MarkerArray()
        # candidates arrive sorted, so the first is the cheapest
        min_cost = candidates[0].cost if candidates else 0.0

        marker_id = 0
        for c in candidates:
            pts = self._marker('frontiers', marker_id, Marker.POINTS)
            pts.scale.x = pts.scale.y = pts.scale.z = 0.1
            pts.color = _RED if blacklist.contains(c.centroid) else _BLUE
            for p in c.support_points or (c.centroid,):
                pts.points.append(Point(x=float(p.x), y=float(p.y), z=0.0))
            markers.markers.append(pts)
            marker_id += 1

            sphere = self._marker('frontiers', marker_id, Marker.SPHERE)
            sphere.pose.position.x = float(c.viewpoint.x)
            sphere.pose.position.y = float(c.viewpoint.y)
            # costlier frontiers are drawn smaller
            scale = 0.5 if c.cost == 0.0 else min(abs(min_cost * 0.4 / c.cost), 0.5)
            sphere.scale.x = sphere.scale.y = sphere.scale.z = scale
            sphere.color = _BLUE
            markers.markers.append(sphere)
            marker_id += 1

        # delete markers left over from a longer list last tick
        count = marker_id
        for stale in range(marker_id, self._last_count[agent]):
            m = self._marker('frontiers', stale, Marker.POINTS)
            m.action = Marker.DELETE
            markers.markers.append(m)
        self._last_count[agent] = count

        self._pubs[agent].publish(markers)

    def show_goal(self, agent: str, candidate: Candidate):
        m = self._marker('goal', 0, Marker.SPHERE)
        m.pose.position.x = float(candidate.centroid.x)
        m.pose.position.y = float(candidate.centroid.y)
        m.scale.x = m.scale.y = m.scale.z = 0.5
        m.color = _GREEN
        self._pubs[agent].publish(MarkerArray(markers=[m]))
