import sys
from pathlib import Path

import pytest

# Ensure the repo root is on PYTHONPATH so `import explore_coordinator` works in tests
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from explore_coordinator import (  # noqa: E402
    AgentSlot,
    Candidate,
    ExplorationBoundary,
    ExplorationContext,
    GoalArbitrator,
    GoalBlacklist,
    PlanningScheduler,
    Point2D,
    ProgressTracker,
)

TIMEOUT = 30.0
TOLERANCE = 0.25


class FakeClock:
    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float):
        self.t += dt


class FakeAdapter:
    """Records goals; results are delivered by the test via finish()."""

    def __init__(self, connected=True, immediate_outcome=None):
        self.connected = connected
        self.immediate_outcome = immediate_outcome
        self.submitted = []
        self.callbacks = []
        self.cancel_calls = 0

    def is_connected(self):
        return self.connected

    def submit_goal(self, point, on_result):
        self.submitted.append(point)
        self.callbacks.append((point, on_result))
        if self.immediate_outcome is not None:
            # some transports report inside the send call
            on_result(self.immediate_outcome, point)

    def cancel_all(self):
        self.cancel_calls += 1

    def finish(self, outcome):
        point, cb = self.callbacks[-1]
        cb(outcome, point)


class FakeSource:
    """Every agent sits at its own position; lists are keyed by agent."""

    def __init__(self, ranked=None):
        self.ranked = dict(ranked or {})
        self.positions = {}
        self.rank_calls = 0
        self.on_rank = None

    def agent_position(self, agent):
        if agent not in self.positions:
            # unique fake pose per agent
            self.positions[agent] = Point2D(float(len(self.positions)), -100.0)
        return self.positions[agent]

    def rank(self, position):
        self.rank_calls += 1
        if self.on_rank is not None:
            self.on_rank()
        for agent, pos in self.positions.items():
            if pos == position:
                return list(self.ranked.get(agent, []))
        return []


def cand(x, y, cost, min_distance=5.0):
    return Candidate(centroid=Point2D(x, y), cost=cost, min_distance=min_distance)


class World:
    def __init__(self, names, connected=True, immediate_outcome=None):
        self.clock = FakeClock()
        self.adapters = {n: FakeAdapter(connected, immediate_outcome) for n in names}
        self.boundary = ExplorationBoundary(
            [Point2D(0, 0), Point2D(10, 0), Point2D(10, 10), Point2D(0, 10)])
        self.context = ExplorationContext(
            self.boundary, GoalBlacklist(TOLERANCE),
            [AgentSlot(n, self.adapters[n], ProgressTracker(TIMEOUT))
             for n in names],
            clock=self.clock)
        self.source = FakeSource()
        self.wakeups = 0
        self.arbitrator = GoalArbitrator(self.context, self.source)
        self.scheduler = PlanningScheduler(
            self.context, self.arbitrator, period=1.0, wakeup=self._wake)

    def _wake(self):
        self.wakeups += 1

    def slot(self, name):
        return self.context.agents[name]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_world():
    return World


@pytest.fixture
def make_candidate():
    return cand
