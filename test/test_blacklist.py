from explore_coordinator import CycleClaimSet, GoalBlacklist, Point2D


def test_added_point_stays_blacklisted():
    bl = GoalBlacklist(0.25)
    p = Point2D(3.0, 4.0)
    bl.add(p)
    for i in range(20):
        bl.add(Point2D(float(i), -5.0))
    assert bl.contains(p)
    assert p in bl
    assert len(bl) == 21


def test_match_is_per_axis_box_not_radius():
    bl = GoalBlacklist(0.25)
    bl.add(Point2D(0.0, 0.0))
    # euclidean distance 0.28 > 0.25, but each axis is within tolerance
    assert bl.contains(Point2D(0.2, 0.2))
    assert not bl.contains(Point2D(0.3, 0.0))
    assert not bl.contains(Point2D(0.0, -0.3))


def test_threshold_is_strict():
    bl = GoalBlacklist(0.25)
    bl.add(Point2D(0.0, 0.0))
    assert not bl.contains(Point2D(0.25, 0.0))
    assert bl.contains(Point2D(0.2499, 0.0))


def test_matches_are_not_transitive():
    p, q1, q2 = Point2D(0.0, 0.0), Point2D(0.2, 0.0), Point2D(-0.2, 0.0)

    around_p = GoalBlacklist(0.25)
    around_p.add(p)
    assert around_p.contains(q1) and around_p.contains(q2)

    around_q1 = GoalBlacklist(0.25)
    around_q1.add(q1)
    assert not around_q1.contains(q2)


def test_empty_blacklist_contains_nothing():
    assert not GoalBlacklist(0.25).contains(Point2D(0, 0))


def test_claim_set_seed_and_claim():
    claims = CycleClaimSet(0.25, [Point2D(1.0, 1.0)])
    assert claims.contains(Point2D(1.1, 0.9))
    assert not claims.contains(Point2D(3.0, 3.0))
    claims.claim(Point2D(3.0, 3.0))
    assert Point2D(3.1, 3.0) in claims
    assert len(claims) == 2
