"""Features of the straight segments joining the vertices of a chain."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

_PI = 3.141592


@dataclass
class Segment:
    """One segment of a polygonal approximation and the chain it comes from."""

    length: float
    mean: float
    variance: float
    x_mid: float
    y_mid: float
    cos: float
    sin: float
    orientation: float
    error: float
    chain: int
    chain_length: int
    closed: bool
    segment_count: int
    origin: tuple[float, float, float]
    end: tuple[float, float, float]


def segment_features(
    points: Sequence[Sequence[float]],
    vertices: Sequence[int],
    number: int,
    closed: bool,
) -> list[Segment]:
    """Describe each segment between consecutive ``vertices`` of a chain.

    ``points`` holds ``(x, y, level)`` items; coordinates and levels are
    taken as integers.  The mean and variance are those of the grey
    levels of the links from one vertex to the next, both included; the
    variance is further divided by the number of links.  The orientation
    lies in degrees between 0 and 360.  Raises ValueError for a segment
    whose vertices are out of order or coincide.
    """
    links = [(int(p[0]), int(p[1]), int(p[2])) for p in points]
    segment_count = len(vertices) - 1
    segments: list[Segment] = []
    for a, b in zip(vertices, vertices[1:]):
        if b < a:
            raise ValueError(f"vertex {b} comes before vertex {a}")
        xd, yd, level_d = links[a]
        xf, yf, level_f = links[b]
        length = math.hypot(xd - xf, yd - yf)
        if length == 0:
            raise ValueError(f"vertices {a} and {b} coincide")

        levels = [link[2] for link in links[a : b + 1]]
        count = len(levels)
        mean = sum(levels) / count
        variance = (sum(level * level for level in levels) / count - mean * mean) / count

        cos = (xf - xd) / length
        sin = (yf - yd) / length
        theta = math.atan2(yf - yd, xf - xd) * 180.0 / _PI
        if sin < 0:
            theta += 360.0

        segments.append(
            Segment(
                length=length,
                mean=mean,
                variance=variance,
                x_mid=(xd + xf) / 2,
                y_mid=(yd + yf) / 2,
                cos=cos,
                sin=sin,
                orientation=theta,
                error=0.0,
                chain=number,
                chain_length=len(links),
                closed=bool(closed),
                segment_count=segment_count,
                origin=(float(xd), float(yd), float(level_d)),
                end=(float(xf), float(yf), float(level_f)),
            )
        )
    return segments