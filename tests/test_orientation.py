import math

import pytest

from edgechains.orientation import (
    Contrast,
    contrast_code,
    orient_segment,
    quadrant,
    segment_angle,
)


def _edge_image(dark_left=True):
    low, high = (0, 100) if dark_left else (100, 0)
    return [
        [low if c < 9 else 50 if c == 9 else high for c in range(20)]
        for _ in range(20)
    ]


@pytest.mark.parametrize(
    "s,s1,centre,code",
    [
        (100.0, 0.0, 50.0, 1),
        (0.0, 100.0, 50.0, 2),
        (10.0, 10.0, 10.0, 3),
        (10.0, 10.0, 5.0, 4),
    ],
)
def test_contrast_codes_are_fixed(s, s1, centre, code):
    assert contrast_code(s, s1, centre, 4.0).value == code


def test_contrast_equal_sides():
    assert contrast_code(10.0, 10.0, 10.0, 4.0) is Contrast.RIDGE
    assert contrast_code(10.0, 10.0, 5.0, 4.0) is Contrast.VALLEY


def test_contrast_between_sides():
    assert contrast_code(100.0, 0.0, 50.0, 4.0) is Contrast.FIRST_BRIGHTER
    assert contrast_code(0.0, 100.0, 50.0, 4.0) is Contrast.SECOND_BRIGHTER


@pytest.mark.parametrize("s,s1,centre", [(10.0, 0.0, 12.0), (10.0, 0.0, -3.0), (3.0, 7.0, 40.0)])
def test_contrast_swapping_sides_swaps_code(s, s1, centre):
    first = contrast_code(s, s1, centre, 4.0)
    second = contrast_code(s1, s, centre, 4.0)
    swap = {
        Contrast.FIRST_BRIGHTER: Contrast.SECOND_BRIGHTER,
        Contrast.SECOND_BRIGHTER: Contrast.FIRST_BRIGHTER,
        Contrast.RIDGE: Contrast.RIDGE,
        Contrast.VALLEY: Contrast.VALLEY,
    }
    assert second is swap[first]


def test_strong_peak_is_ridge_and_deep_trough_is_valley():
    assert contrast_code(10.0, 0.0, 1000.0, 4.0) is Contrast.RIDGE
    assert contrast_code(10.0, 0.0, -1000.0, 4.0) is Contrast.VALLEY


def test_segment_angle_horizontal():
    theta, cos, sin = segment_angle((0, 0), (5, 0))
    assert theta == 0.0
    assert cos == pytest.approx(1.0)
    assert sin == pytest.approx(0.0)


def test_segment_angle_reversed_differs_by_half_turn():
    theta, cos, sin = segment_angle((1, 2), (4, 7))
    back, bcos, bsin = segment_angle((4, 7), (1, 2))
    assert cos * cos + sin * sin == pytest.approx(1.0)
    assert bcos == pytest.approx(-cos)
    assert bsin == pytest.approx(-sin)
    assert abs(theta - back) == pytest.approx(180.0 / 3.141592 * math.pi, rel=1e-9)


@pytest.mark.parametrize(
    "dx,dy,code",
    [(0, 5, 0), (5, 0, 10), (0, 0, 10), (3, 3, 4), (2, 5, 3), (5, -2, 1), (-2, 5, 2), (1, 9, 0)],
)
def test_quadrant(dx, dy, code):
    assert quadrant(dx, dy) == code


def test_orient_segment_vertical_edge_keeps_direction():
    result = orient_segment(_edge_image(), (10, 5, 0), (10, 15, 0), (10.0, 10.0))
    assert result.quadrant == 0
    assert result.contrast is Contrast.SECOND_BRIGHTER
    assert result.inverted is False
    assert result.origin == (10.0, 5.0, 0.0)
    assert result.end == (10.0, 15.0, 0.0)


def test_orient_segment_is_independent_of_input_direction():
    image = _edge_image()
    forward = orient_segment(image, (10, 5, 0), (10, 15, 0), (10.0, 10.0))
    backward = orient_segment(image, (10, 15, 0), (10, 5, 0), (10.0, 10.0))
    assert backward.inverted is True
    assert backward.origin == forward.origin
    assert backward.end == forward.end
    assert backward.orientation == pytest.approx(forward.orientation)


def test_orient_segment_flipped_contrast_reverses_direction():
    normal = orient_segment(_edge_image(True), (10, 5, 0), (10, 15, 0), (10.0, 10.0))
    flipped = orient_segment(_edge_image(False), (10, 5, 0), (10, 15, 0), (10.0, 10.0))
    assert flipped.origin == normal.end
    assert flipped.end == normal.origin
    assert flipped.sin == pytest.approx(-normal.sin)


def test_orient_segment_rejects_small_window():
    with pytest.raises(ValueError):
        orient_segment(_edge_image(), (10, 5, 0), (10, 15, 0), (10.0, 10.0), window=2)


def test_orient_segment_rejects_image_too_small():
    with pytest.raises(ValueError):
        orient_segment([[0, 0], [0, 0]], (1, 1, 0), (2, 2, 0), (1.5, 1.5))