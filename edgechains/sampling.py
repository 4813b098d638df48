"""Sampling of a chain into polygon vertices by angular variation.

The direction of the trace at a point is taken as the vector from that
point to the first later point at least ``dmin1`` away.  The first such
vector is the reference.  Each later vector is compared with it.  A
point is sampled when one of two things happens.  The angle to the
reference may exceed ``eps1``.  Or the spread of directions met since
the reference may exceed ``eps2``.  The vertex kept is the point of
greatest curvature within ``field`` of where the break was seen.
Curvature is measured between the vectors of length ``dmin2`` that
arrive at and leave each point.
"""

from __future__ import annotations

import math
from typing import Sequence

_PI = 3.14159

EPS1 = 25
EPS2 = 40
DMIN1 = 4.0
DMIN2 = 4.0
FIELD = 3.0

_Vector = tuple[int, int]


def sample_by_angle(
    points: Sequence[Sequence[float]],
    eps1: float = EPS1,
    eps2: float = EPS2,
    dmin1: float = DMIN1,
    dmin2: float = DMIN2,
    field: float = FIELD,
) -> list[int]:
    """Return the indices of the points kept as polygon vertices.

    ``points`` holds items whose first two entries are the integer
    column and row of each link.  Angles are in degrees.  The first
    point is always kept and the last point is always appended.
    """
    xy = [(int(p[0]), int(p[1])) for p in points]
    n = len(xy)
    if n == 0:
        return []

    e1 = int(math.tan(eps1 * _PI / 180.0) * 100)
    e2 = int(math.tan(eps2 * _PI / 180.0) * 100)
    r1 = int(dmin1 * dmin1)
    r2 = int(dmin2 * dmin2)
    rch = int(field * field)

    def vec(a: int, b: int) -> _Vector:
        return (xy[b][0] - xy[a][0], xy[b][1] - xy[a][1])

    def norm2(v: _Vector) -> int:
        return v[0] * v[0] + v[1] * v[1]

    def reach(origin: int, begin: int, radius: int) -> int:
        # First index after ``begin`` at least sqrt(radius) from ``origin``, or n.
        for j in range(begin + 1, n):
            if norm2(vec(origin, j)) >= radius:
                return j
        return n

    samples = [0]
    ic = 0
    while ic < n:
        iext = reach(ic, ic, r1)
        if iext >= n:
            break
        ref = vec(ic, iext)

        vmax: _Vector = (1, 0)
        vmin: _Vector = (1, 0)
        ic = iext - 1
        while True:
            iext = reach(ic, iext, r1)
            if iext >= n:
                break
            cur = vec(ic, iext)
            cx = cur[0] * ref[0] + cur[1] * ref[1]
            cy = ref[0] * cur[1] - ref[1] * cur[0]
            updated = False
            if cy > 0:
                if 100 * cy - e1 * cx >= 0:
                    break
                if vmax[0] * cy - vmax[1] * cx > 0:
                    vmax = (cx, cy)
                    updated = True
            else:
                if 100 * cy + e1 * cx <= 0:
                    break
                if vmin[0] * cy - vmin[1] * cx < 0:
                    vmin = (cx, cy)
                    updated = True
            if updated:
                sx = vmax[0] * vmin[0] + vmax[1] * vmin[1]
                sy = vmin[0] * vmax[1] - vmin[1] * vmax[0]
                if sy < 0 or 100 * sy - e2 * sx >= 0:
                    break
            ic += 1
            iext = ic
        if iext >= n:
            break

        last = samples[-1]
        finco = ic + 1
        while finco < n and norm2(vec(ic, finco)) <= rch:
            finco += 1
        back = ic - 1
        while back > last and norm2(vec(back, ic)) <= rch:
            back -= 1
        start = max(back, last + 1)
        if start >= finco:
            break

        vnext = ref
        best: _Vector = (1, 0)
        pmax = start
        for k in range(start, finco):
            j = k - 1
            while j >= last and norm2(vec(j, k)) < r2:
                j -= 1
            vprev = vec(j, k) if j >= last else ref
            j = k + 1
            while j < n and norm2(vec(k, j)) < r2:
                j += 1
            if j < n:
                vnext = vec(k, j)
            cx = vprev[0] * vnext[0] + vprev[1] * vnext[1]
            cy = abs(vprev[0] * vnext[1] - vprev[1] * vnext[0])
            if best[0] * cy - best[1] * cx > 0:
                pmax = k
                best = (cx, cy)

        if finco < n or norm2(vec(pmax, n - 1)) >= rch:
            samples.append(pmax)
            ic = pmax
        else:
            break

    samples.append(n - 1)
    return samples