import pytest

from explore_coordinator import (
    BoundaryConfigError,
    ExplorationContext,
    ExploreParams,
    Point2D,
)

SQUARE = [0.0, 0.0, 10.0, 0.0, 10.0, 10.0, 0.0, 10.0]


class _Adapter:
    def is_connected(self):
        return True

    def submit_goal(self, point, on_result):
        pass

    def cancel_all(self):
        pass


def test_defaults_validate_once_boundary_given():
    p = ExploreParams(exploration_boundary=SQUARE).validate()
    assert p.planner_period == 1.0
    assert p.robot_namespaces == ['d1', 'd2']


@pytest.mark.parametrize('override', [
    {'robot_namespaces': []},
    {'robot_namespaces': ['d1', 'd1']},
    {'planner_frequency': 0.0},
    {'progress_timeout': -1.0},
    {'blacklist_tolerance': -0.1},
    {'exploration_boundary': [0.0, 0.0, 1.0, 1.0]},
    {'exploration_boundary': SQUARE[:-1]},
])
def test_invalid_settings_raise(override):
    kwargs = {'exploration_boundary': SQUARE}
    kwargs.update(override)
    with pytest.raises(ValueError):
        ExploreParams(**kwargs).validate()


def test_context_from_params_builds_one_slot_per_namespace():
    p = ExploreParams(robot_namespaces=['r1', 'r2', 'r3'],
                      exploration_boundary=SQUARE,
                      progress_timeout=12.0, blacklist_tolerance=0.5)
    ctx = ExplorationContext.from_params(
        p, {ns: _Adapter() for ns in p.robot_namespaces}, clock=lambda: 0.0)

    assert list(ctx.agents) == ['r1', 'r2', 'r3']
    assert ctx.agents['r2'].tracker.timeout == 12.0
    assert ctx.blacklist.tolerance == 0.5
    assert ctx.boundary.admits(Point2D(5, 5))
    assert ctx.active_goals() == []


def test_degenerate_boundary_refuses_to_build_context():
    p = ExploreParams(robot_namespaces=['r1'],
                      exploration_boundary=[0.0, 0.0, 5.0, 0.0, 10.0, 0.0])
    with pytest.raises(BoundaryConfigError):
        ExplorationContext.from_params(p, {'r1': _Adapter()})


def test_active_goals_excludes_asking_agent():
    p = ExploreParams(robot_namespaces=['r1', 'r2'], exploration_boundary=SQUARE)
    ctx = ExplorationContext.from_params(p, {'r1': _Adapter(), 'r2': _Adapter()})
    ctx.agents['r1'].current_goal = Point2D(1, 1)
    ctx.agents['r2'].current_goal = Point2D(2, 2)
    assert ctx.active_goals(exclude='r1') == [Point2D(2, 2)]
