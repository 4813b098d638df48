"""Orientation of segments from the local contrast of the image.

A segment is turned so that the dark side of the edge lies on its
right as it is travelled.  The grey levels are sampled in a small
window around the middle of the segment.  The image is a sequence of
rows, each a sequence of grey levels.  Pixel coordinates are 1-based,
as in the chain and segment records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

_PI = 3.141592

DEFAULT_THRESHOLD = 4.0
DEFAULT_WINDOW = 7


class Contrast(IntEnum):
    """How the centre grey level compares with the two sides of the edge."""

    FIRST_BRIGHTER = 1
    SECOND_BRIGHTER = 2
    RIDGE = 3
    VALLEY = 4


@dataclass
class OrientedSegment:
    """A segment turned according to the contrast, with its true direction."""

    origin: tuple[float, ...]
    end: tuple[float, ...]
    cos: float
    sin: float
    orientation: float
    contrast: Contrast
    quadrant: int
    inverted: bool


def contrast_code(s: float, s1: float, centre: float, threshold: float) -> Contrast:
    """Classify the centre level ``centre`` between the side means ``s`` and ``s1``."""
    if s == s1:
        return Contrast.RIDGE if centre >= s else Contrast.VALLEY
    if s >= centre >= s1:
        return Contrast.FIRST_BRIGHTER
    if s1 >= centre >= s:
        return Contrast.SECOND_BRIGHTER

    if centre > s:
        dog = centre - s
        dag = centre - s1
        nmax, nval = (dog, s1) if dog > dag else (dag, s)
        if centre - nmax / threshold > nval:
            return Contrast.RIDGE
        return Contrast.FIRST_BRIGHTER if s == nval else Contrast.SECOND_BRIGHTER

    dog = s - centre
    dag = s1 - centre
    nmax, nval = (dog, s1) if dog > dag else (dag, s)
    if centre + nmax / threshold < nval:
        return Contrast.VALLEY
    return Contrast.FIRST_BRIGHTER if s1 == nval else Contrast.SECOND_BRIGHTER


def segment_angle(origin: Sequence[float], end: Sequence[float]) -> tuple[float, float, float]:
    """Return ``(degrees, cos, sin)`` of the direction from ``origin`` to ``end``.

    The angle lies between -180 and 180 degrees.
    """
    radians = math.atan2(end[1] - origin[1], end[0] - origin[0])
    return radians * 180.0 / _PI, math.cos(radians), math.sin(radians)


def quadrant(dx: int, dy: int) -> int:
    """Return the sampling pattern code for a segment half-vector ``(dx, dy)``.

    0: near vertical, 10: horizontal, 1 and 2: opposite signs,
    3 and 4: same signs; 1 and 4 for the flatter cases.
    """
    code = 0
    if dx == 0:
        code = 0
    if dy == 0:
        code = 10
    if dx * dy > 0:
        code = 11
    if dx * dy < 0:
        code = 22
    if abs(dx) < 3 and abs(dy) > 8:
        code = 0
    if code == 11:
        code = 4 if abs(dx) >= abs(dy) else 3
    elif code == 22:
        code = 1 if abs(dx) >= abs(dy) else 2
    return code


class _Window:
    """A band of image rows read as one flat run of grey levels."""

    def __init__(self, image: Sequence[Sequence[float]], first_row: int, rows: int, width: int) -> None:
        if first_row < 0 or first_row + rows > len(image):
            raise ValueError(
                f"rows {first_row + 1} to {first_row + rows} are outside the image"
            )
        self.values: list[float] = []
        for row in image[first_row : first_row + rows]:
            if len(row) != width:
                raise ValueError("image rows differ in length")
            self.values.extend(float(value) for value in row)

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < len(self.values):
            raise ValueError(f"window position {index} is outside the image")
        return self.values[index]

    def mean(self, *indices: int) -> float:
        return sum(self[index] for index in indices) / len(indices)


def orient_segment(
    image: Sequence[Sequence[float]],
    origin: Sequence[float],
    end: Sequence[float],
    midpoint: tuple[float, float],
    threshold: float = DEFAULT_THRESHOLD,
    window: int = DEFAULT_WINDOW,
) -> OrientedSegment:
    """Orient the segment from ``origin`` to ``end`` by the contrast around ``midpoint``.

    ``origin`` and ``end`` are link records whose first two entries are
    the column and row.  Raises ValueError when the window does not fit
    in the image or is smaller than 3.
    """
    if window < 3:
        raise ValueError("window must be at least 3")
    height = len(image)
    width = len(image[0]) if height else 0

    half = window // 2
    band = (window - 3) // 2

    mid_x, mid_y = midpoint
    ix = int(mid_x + 0.5)
    iy = int(mid_y + 0.5)

    dx = int(origin[0] - mid_x)
    dy = int(origin[1] - mid_y)
    code = quadrant(dx, dy)

    if iy <= half:
        iy = half + 1
    if iy + half > height:
        iy = height - half
    if ix < half:
        ix = half
    if ix + half > width:
        ix = width
    first_row = iy - half - 1

    buf = _Window(image, first_row, window, width)
    w = width
    ix -= 1
    centre = buf[half * w + ix]

    if code == 0:
        fla = band * w + ix - half
        flo = band * w + ix + half
        s = buf.mean(fla, fla + w, fla + 2 * w)
        s1 = buf.mean(flo, flo + w, flo + 2 * w)
    elif code == 10:
        fla = ix - 1
        flo = (window - 1) * w + fla
        s = buf.mean(fla, fla + 1, fla + 2)
        s1 = buf.mean(flo, flo + 1, flo + 2)
    elif code == 1:
        fla = ix - half
        flo = (window - 1) * w + ix + half
        s = buf.mean(fla, fla + 1, fla + 2, w + fla)
        s1 = buf.mean(flo, flo - 1, flo - 2, flo - w)
    elif code == 2:
        fla = ix - half
        flo = (window - 3) * w + ix + half
        s = buf.mean(fla, fla + 1, fla + w, fla + 2 * w)
        s1 = buf.mean(flo, flo + w, flo + 2 * w, flo + 2 * w - 1)
    elif code == 3:
        fla = ix + half
        flo = (window - 3) * w + ix - half
        s1 = buf.mean(fla, fla - 1, fla + w, fla + 2 * w)
        s = buf.mean(flo, flo + w, flo + 2 * w, flo + 2 * w + 1)
    else:
        fla = ix + half - 2
        flo = (window - 2) * w + ix - half
        s = buf.mean(fla, fla + 1, fla + 2 + w, fla + 2)
        s1 = buf.mean(flo, flo + w, flo + w + 1, flo + w + 2)

    contrast = contrast_code(s, s1, centre, threshold)

    vertical_like = code in (0, 2, 3)
    inverted = False
    if contrast == Contrast.FIRST_BRIGHTER:
        inverted = (vertical_like and dy < 0) or (not vertical_like and dx > 0)
    elif contrast == Contrast.SECOND_BRIGHTER:
        inverted = (vertical_like and dy > 0) or (not vertical_like and dx < 0)

    new_origin = tuple(float(v) for v in (end if inverted else origin))
    new_end = tuple(float(v) for v in (origin if inverted else end))
    theta, cos, sin = segment_angle(new_origin, new_end)
    return OrientedSegment(
        origin=new_origin,
        end=new_end,
        cos=cos,
        sin=sin,
        orientation=theta,
        contrast=contrast,
        quadrant=code,
        inverted=inverted,
    )