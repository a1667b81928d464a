import math
import numpy as np
import pytest

from pursuit_sim.envs.world import WorldPoint, distance
from pursuit_sim.strategies.greedy_chase import GreedyChaseStrategy


def test_candidates_lie_on_both_circles():
    s = GreedyChaseStrategy(0.0, -3.0)
    other = WorldPoint(5.0, 0.0)
    c1, c2 = s.candidates(other, 5)
    for c in (c1, c2):
        assert distance(c, WorldPoint(0.0, 0.0)) == pytest.approx(5.0, abs=1e-9)
        assert distance(c, other) == pytest.approx(1.0, abs=1e-9)
    assert c1.x == pytest.approx(4.9)
    assert c1.y == pytest.approx(math.sqrt(0.99))
    assert c2.y == pytest.approx(-math.sqrt(0.99))


def test_moves_toward_farther_candidate():
    s = GreedyChaseStrategy(0.0, -3.0)
    p = s.next(WorldPoint(5.0, 0.0), 5)
    far = np.array([4.9, math.sqrt(0.99)])
    here = np.array([0.0, -3.0])
    expected = here + (far - here) / np.linalg.norm(far - here)
    assert np.allclose(p, expected)
    assert p == s.point


def test_candidates_with_shifted_origin():
    o = WorldPoint(10.0, 10.0)
    s = GreedyChaseStrategy(10.0, 10.0, origin=o)
    other = WorldPoint(13.0, 14.0)
    c1, c2 = s.candidates(other, 5)
    for c in (c1, c2):
        assert distance(c, o) == pytest.approx(5.0, abs=1e-9)
        assert distance(c, other) == pytest.approx(1.0, abs=1e-9)


def test_disjoint_circles_chase_straight():
    s = GreedyChaseStrategy(0.0, 0.0)
    other = WorldPoint(10.0, 0.0)
    assert s.candidates(other, 1) is None
    assert np.allclose(s.next(other, 1), (1.0, 0.0))


def test_nested_circles_chase_straight():
    s = GreedyChaseStrategy(0.0, 4.0)
    other = WorldPoint(0.0, 1.0)
    # R = 10, d = 1 < R - r
    assert s.candidates(other, 10) is None
    assert np.allclose(s.next(other, 10), (0.0, 3.0))


def test_other_at_origin_uses_fallback_target():
    s = GreedyChaseStrategy(0.0, 0.0)
    p = s.next(WorldPoint(0.0, 0.0), 3)
    assert np.allclose(p, (1.0, 0.0))


def test_stays_put_when_already_on_target():
    s = GreedyChaseStrategy(2.0, 0.0)
    p = s.next(WorldPoint(0.0, 0.0), 2)
    assert p == WorldPoint(2.0, 0.0)
    assert s.point == p


def test_every_move_is_one_step_length():
    rng = np.random.default_rng(7)
    s = GreedyChaseStrategy(0.0, 0.0, step_length=0.5)
    for it in range(1, 200):
        before = s.point
        other = WorldPoint(*rng.uniform(-50, 50, size=2))
        after = s.next(other, it)
        assert distance(before, after) == pytest.approx(0.5)


def test_rejects_non_positive_step():
    with pytest.raises(ValueError):
        GreedyChaseStrategy(0.0, 0.0, step_length=0.0)


def test_candidates_none_when_other_at_origin():
    s = GreedyChaseStrategy(1.0, 1.0)
    assert s.candidates(WorldPoint(0.0, 0.0), 4) is None
    # next() still moves, toward the fallback target on the x axis
    expected = np.array([1.0, 1.0]) + np.array([3.0, -1.0]) / math.sqrt(10.0)
    assert np.allclose(s.next(WorldPoint(0.0, 0.0), 4), expected)
