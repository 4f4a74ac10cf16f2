from explore_coordinator import Candidate, Point2D, ProgressStatus, ProgressTracker


def _c(x, y, d):
    return Candidate(centroid=Point2D(x, y), cost=1.0, min_distance=d)


def test_first_goal_counts_as_progress():
    t = ProgressTracker(timeout=30.0)
    assert t.observe(_c(5, 5, 4.0), now=0.0) is ProgressStatus.NEW_GOAL
    assert t.last_progress_time == 0.0
    assert t.last_known_distance == 4.0


def test_closer_distance_resets_timer():
    t = ProgressTracker(timeout=30.0)
    t.observe(_c(5, 5, 4.0), now=0.0)
    assert t.observe(_c(5, 5, 3.0), now=25.0) is ProgressStatus.PROGRESSING
    assert t.observe(_c(5, 5, 3.0), now=50.0) is ProgressStatus.WAITING
    assert t.last_progress_time == 25.0


def test_no_improvement_past_timeout_stalls():
    t = ProgressTracker(timeout=30.0)
    t.observe(_c(5, 5, 4.0), now=0.0)
    assert t.observe(_c(5, 5, 4.0), now=30.0) is ProgressStatus.WAITING
    assert t.observe(_c(5, 5, 4.5), now=31.0) is ProgressStatus.STALLED
    assert t.stalled_for(31.0) == 31.0


def test_different_goal_resets_even_when_farther():
    t = ProgressTracker(timeout=30.0)
    t.observe(_c(5, 5, 4.0), now=0.0)
    assert t.observe(_c(7, 7, 9.0), now=40.0) is ProgressStatus.NEW_GOAL
    assert t.last_known_distance == 9.0
    assert t.observe(_c(7, 7, 9.0), now=60.0) is ProgressStatus.WAITING


def test_goal_tolerance_decides_same_goal():
    t = ProgressTracker(timeout=1.0, goal_tolerance=0.5)
    t.observe(_c(5, 5, 4.0), now=0.0)
    assert t.observe(_c(5.3, 5.0, 4.0), now=2.0) is ProgressStatus.STALLED


def test_reset_starts_a_fresh_window():
    t = ProgressTracker(timeout=30.0)
    t.observe(_c(5, 5, 4.0), now=0.0)
    t.reset()
    assert t.previous_goal is None
    assert t.observe(_c(5, 5, 4.0), now=100.0) is ProgressStatus.NEW_GOAL
    assert t.last_progress_time == 100.0
