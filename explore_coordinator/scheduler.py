"""
scheduler.py

Drives planning ticks.

  on_timer()   — periodic tick: plan every agent with a fresh claim set.
  on_wakeup()  — deferred tick: apply goal results queued by adapters and
                 replan only the agents they belong to.

Goal result callbacks may run on any thread and may even fire from inside
submit_goal(). They only go through notify_result(), which queues the
result and asks the execution context for a wakeup; planning never starts
from inside the callback. Ticks are serialized: a tick that finds another
one running is dropped, and anything it would have handled is picked up by
the running tick or the next wakeup.
"""

import logging
import queue
import threading
from typing import Callable, Dict, List, Optional

from .agent import GoalOutcome
from .arbitrator import ExplorationContext, GoalArbitrator, PlanDecision
from .blacklist import CycleClaimSet
from .geometry import Point2D


class PlanningScheduler:
    def __init__(self, context: ExplorationContext,
                 arbitrator: GoalArbitrator,
                 period: float,
                 wakeup: Optional[Callable[[], None]] = None,
                 logger=None):
        self._ctx = context
        self._arbitrator = arbitrator
        self.period = period
        self._wakeup = wakeup or (lambda: None)
        self._log = logger or logging.getLogger(__name__)

        self._pending: 'queue.SimpleQueue[tuple]' = queue.SimpleQueue()
        self._tick_lock = threading.Lock()
        self._enabled = False

    # ── Process control ───────────────────────────────────────────────────
    @property
    def running(self) -> bool:
        return self._enabled

    def start(self):
        if not self._enabled:
            self._enabled = True
            self._log.info('Exploration started.')

    def stop(self):
        for slot in self._ctx.agents.values():
            if not slot.refresh_connection():
                continue
            slot.halt()
        if self._enabled:
            self._enabled = False
            self._log.info('Exploration stopped.')

    # ── Result handoff (any thread) ───────────────────────────────────────
    def notify_result(self, agent: str, outcome: GoalOutcome, goal: Point2D):
        self._pending.put((agent, outcome, goal))
        self._wakeup()

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    # ── Ticks ─────────────────────────────────────────────────────────────
    def on_timer(self) -> Optional[Dict[str, PlanDecision]]:
        if not self._enabled:
            return None
        return self._serialized(self.run_cycle)

    def on_wakeup(self) -> Optional[Dict[str, PlanDecision]]:
        return self._serialized(self.run_deferred)

    def run_cycle(self) -> Dict[str, PlanDecision]:
        """One full planning pass over every agent."""
        self._apply_results()
        claims = CycleClaimSet(self._ctx.blacklist.tolerance)
        decisions = {}
        for name, slot in self._ctx.agents.items():
            decisions[name] = self._arbitrator.plan(
                slot, claims, self.notify_result)
        return decisions

    def run_deferred(self) -> Dict[str, PlanDecision]:
        """Replan the agents whose goals finished since the last tick."""
        requested = self._apply_results()
        if not self._enabled:
            return {}
        decisions = {}
        for name in requested:
            # other agents keep their goals this tick, so they count as claimed
            claims = CycleClaimSet(self._ctx.blacklist.tolerance,
                                   self._ctx.active_goals(exclude=name))
            decisions[name] = self._arbitrator.plan(
                self._ctx.agents[name], claims, self.notify_result)
        return decisions

    def _serialized(self, tick):
        if not self._tick_lock.acquire(blocking=False):
            self._log.debug('planning tick already running, skipping')
            return None
        try:
            return tick()
        finally:
            self._tick_lock.release()
            if not self._pending.empty():
                self._wakeup()

    def _apply_results(self) -> List[str]:
        requested = []
        while True:
            try:
                name, outcome, goal = self._pending.get_nowait()
            except queue.Empty:
                break
            slot = self._ctx.agents.get(name)
            if slot is None:
                self._log.warning(f'goal result for unknown agent {name!r}')
                continue

            self._log.debug(
                f'[{name}] reached goal {goal} with status: {outcome.value}')
            if outcome.is_failure:
                self._ctx.blacklist.add(goal)
                self._log.warning(
                    f'[{name}] goal {goal} {outcome.value}, '
                    f'adding it to black list')
            # nothing is in flight any more unless the robot got there
            if (outcome is not GoalOutcome.SUCCEEDED and
                    slot.is_current_goal(goal)):
                slot.current_goal = None
            if name not in requested:
                requested.append(name)
        return requested
