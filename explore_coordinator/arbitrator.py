"""
arbitrator.py

Per-agent goal selection for one planning tick.

For each connected agent the arbitrator
  1. asks the frontier source for candidates ranked by cost (ascending),
  2. drops candidates outside the exploration boundary,
  3. takes the first candidate that is neither blacklisted nor claimed by an
     agent processed earlier in the same tick,
  4. runs the agent's progress tracker and, on a stall, blacklists the goal
     and plans again for the same agent,
  5. sends the goal unless the agent is already pursuing it.

Running out of candidates halts the agent. None of these outcomes raise.
"""

import enum
import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from .agent import AgentAdapter, AgentSlot, GoalOutcome
from .blacklist import CycleClaimSet, GoalBlacklist
from .boundary import ExplorationBoundary
from .geometry import Candidate, Point2D
from .params import ExploreParams
from .progress import ProgressStatus, ProgressTracker


class PlanDecision(enum.Enum):
    DISCONNECTED = 'disconnected'
    NO_POSE = 'no_pose'
    NO_FRONTIERS = 'no_frontiers'
    NO_ADMISSIBLE = 'no_admissible'
    RETRIES_EXHAUSTED = 'retries_exhausted'
    KEEP = 'keep'
    DISPATCHED = 'dispatched'


class FrontierSource(Protocol):
    def agent_position(self, agent: str) -> Optional[Point2D]:
        ...

    def rank(self, position: Point2D) -> Sequence[Candidate]:
        """Fresh candidate list, sorted by ascending cost."""
        ...


class FrontierVisualizer(Protocol):
    def show_frontiers(self, agent: str, candidates: Sequence[Candidate],
                       blacklist: GoalBlacklist) -> None:
        ...

    def show_goal(self, agent: str, candidate: Candidate) -> None:
        ...


ResultSink = Callable[[str, GoalOutcome, Point2D], None]


class ExplorationContext:
    """State shared by every planning tick: region, blacklist, agent table."""

    def __init__(self, boundary: ExplorationBoundary,
                 blacklist: GoalBlacklist,
                 agents: Iterable[AgentSlot],
                 clock: Callable[[], float] = time.monotonic):
        self.boundary = boundary
        self.blacklist = blacklist
        self.agents: Dict[str, AgentSlot] = {a.name: a for a in agents}
        self.clock = clock

    @classmethod
    def from_params(cls, params: ExploreParams,
                    adapters: Dict[str, AgentAdapter],
                    clock: Callable[[], float] = time.monotonic):
        boundary = ExplorationBoundary.from_flat(
            params.exploration_boundary, params.boundary_epsilon)
        slots = [
            AgentSlot(ns, adapters[ns],
                      ProgressTracker(params.progress_timeout,
                                      params.goal_match_tolerance))
            for ns in params.robot_namespaces
        ]
        return cls(boundary, GoalBlacklist(params.blacklist_tolerance),
                   slots, clock)

    def active_goals(self, exclude: Optional[str] = None) -> List[Point2D]:
        return [a.current_goal for name, a in self.agents.items()
                if name != exclude and a.current_goal is not None]


class GoalArbitrator:
    def __init__(self, context: ExplorationContext,
                 frontier_source: FrontierSource,
                 visualizer: Optional[FrontierVisualizer] = None,
                 logger=None):
        self._ctx = context
        self._source = frontier_source
        self._vis = visualizer
        self._log = logger or logging.getLogger(__name__)

    def plan(self, slot: AgentSlot, claims: CycleClaimSet,
             on_result: ResultSink) -> PlanDecision:
        if not slot.refresh_connection():
            self._log.debug(f'[{slot.name}] not connected, skipping')
            return PlanDecision.DISCONNECTED

        blacklist = self._ctx.blacklist
        retry_budget = None
        retries = 0

        while True:
            position = self._source.agent_position(slot.name)
            if position is None:
                self._log.debug(f'[{slot.name}] pose unknown, skipping')
                return PlanDecision.NO_POSE

            ranked = list(self._source.rank(position))
            if retry_budget is None:
                retry_budget = len(ranked)
            self._log.debug(f'[{slot.name}] found {len(ranked)} frontiers')
            for i, c in enumerate(ranked):
                self._log.debug(
                    f'[{slot.name}] frontier {i} {c.centroid} cost: {c.cost:f}')

            frontiers = [c for c in ranked
                         if self._ctx.boundary.admits(c.centroid)]
            if not frontiers:
                self._log.debug(
                    f'[{slot.name}] no frontier inside the boundary, halting')
                slot.halt()
                return PlanDecision.NO_FRONTIERS

            self._visualize('show_frontiers', slot.name, frontiers, blacklist)

            chosen = next((c for c in frontiers
                           if not blacklist.contains(c.centroid) and
                           not claims.contains(c.centroid)), None)
            if chosen is None:
                self._log.info(f'[{slot.name}] no frontier available, halting')
                slot.halt()
                return PlanDecision.NO_ADMISSIBLE

            claims.claim(chosen.centroid)
            self._visualize('show_goal', slot.name, chosen)

            now = self._ctx.clock()
            status = slot.tracker.observe(chosen, now)
            if status is ProgressStatus.STALLED:
                blacklist.add(chosen.centroid)
                self._log.info(
                    f'[{slot.name}] no progress towards {chosen.centroid} '
                    f'for {slot.tracker.stalled_for(now):.1f}s, '
                    f'adding current goal to black list')
                retries += 1
                if retries > retry_budget:
                    slot.halt()
                    return PlanDecision.RETRIES_EXHAUSTED
                continue

            if slot.is_current_goal(chosen.centroid):
                return PlanDecision.KEEP

            self._dispatch(slot, chosen.centroid, on_result)
            return PlanDecision.DISPATCHED

    def _dispatch(self, slot: AgentSlot, target: Point2D,
                  on_result: ResultSink):
        slot.current_goal = target
        self._log.info(f'[{slot.name}] sending goal {target}')
        slot.adapter.submit_goal(
            target,
            lambda outcome, point, name=slot.name: on_result(
                name, outcome, point))

    def _visualize(self, method: str, *args):
        if self._vis is None:
            return
        try:
            getattr(self._vis, method)(*args)
        except Exception as e:
            self._log.warning(f'visualization failed ({method}): {e}')
