import math

import pytest

from edgechains.sampling import sample_by_angle


def _line(n):
    return [(i, 0, 100) for i in range(n)]


def _corner():
    horizontal = [(i, 0, 50) for i in range(11)]
    vertical = [(10, i, 50) for i in range(1, 11)]
    return horizontal + vertical


def test_empty_chain_has_no_vertices():
    assert sample_by_angle([]) == []


@pytest.mark.parametrize("n", [5, 12, 30])
def test_straight_line_keeps_only_ends(n):
    assert sample_by_angle(_line(n)) == [0, n - 1]


def test_short_chain_keeps_ends():
    assert sample_by_angle(_line(3)) == [0, 2]


def test_single_point_is_repeated():
    assert sample_by_angle([(4, 4, 1)]) == [0, 0]


def test_right_angle_is_sampled_at_corner():
    assert sample_by_angle(_corner()) == [0, 10, 20]


def test_wide_angle_tolerance_ignores_corner():
    vertices = sample_by_angle(_corner(), eps1=89, eps2=89)
    assert vertices[0] == 0
    assert vertices[-1] == 20
    assert 10 not in vertices[1:-1] or len(vertices) <= 3


def test_circle_vertices_are_ordered_and_in_range():
    points = [
        (round(20 * math.cos(t / 10)), round(20 * math.sin(t / 10)), 7)
        for t in range(60)
    ]
    vertices = sample_by_angle(points)
    assert vertices[0] == 0
    assert vertices[-1] == len(points) - 1
    assert vertices == sorted(vertices)
    assert all(0 <= v < len(points) for v in vertices)
    assert len(vertices) > 2


def test_accepts_level_free_points():
    points = [(i, 0) for i in range(8)]
    assert sample_by_angle(points) == [0, 7]