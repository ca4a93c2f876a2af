"""Vector utilities for Stokes-space geometry (3-vectors as sequences of floats)."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vec3 = Sequence[float]


def _vnorm(v: Vec3) -> float:
    """Euclidean norm of 3-vector."""
    return math.hypot(v[0], v[1], v[2])


def _vsub(a: Vec3, b: Vec3) -> list[float]:
    """Vector difference a - b."""
    return [a[0] - b[0], a[1] - b[1], a[2] - b[2]]


def _vscl(s: float, v: Vec3) -> list[float]:
    """Scale vector: s * v."""
    return [s * v[0], s * v[1], s * v[2]]


def _vlcom(a: float, v1: Vec3, b: float, v2: Vec3) -> list[float]:
    """Linear combination a*v1 + b*v2."""
    return [a * v1[0] + b * v2[0], a * v1[1] + b * v2[1], a * v1[2] + b * v2[2]]


def _vcrss(a: Vec3, b: Vec3) -> list[float]:
    """Cross product a x b."""
    return [
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ]


def _vhat(v: Vec3) -> list[float] | None:
    """Unit vector in direction of v, or None if v has zero length."""
    n = _vnorm(v)
    if n == 0.0:
        return None
    return [v[0] / n, v[1] / n, v[2] / n]
