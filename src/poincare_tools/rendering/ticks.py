"""Tick marks across a trajectory and label anchor points."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from poincare_tools.constants import TICK_OFFSET
from poincare_tools.errors import NumericalDegeneracyError
from poincare_tools.rendering.projection import project
from poincare_tools.rendering.vec_math import Vec3, _vcrss, _vhat, _vlcom, _vnorm, _vscl, _vsub

if TYPE_CHECKING:
    from poincare_tools.params import ViewState
    from poincare_tools.trajectory import Label


def tangent(points: Sequence[Vec3], k: int) -> list[float]:
    """Unit tangent at sample k.

    Central difference inside the trajectory, one-sided difference at the
    first and last sample.

    Raises:
        NumericalDegeneracyError: If the trajectory has fewer than two samples
            or the difference vector has zero length.
        IndexError: If k is out of range.
    """
    n = len(points)
    if not 0 <= k < n:
        raise IndexError(f'Tick index {k} out of range for {n} samples')
    if n < 2:
        raise NumericalDegeneracyError('Cannot take a tangent on a single-sample trajectory', k)
    if k == 0:
        q = _vsub(points[1], points[0])
    elif k == n - 1:
        q = _vsub(points[k], points[k - 1])
    else:
        q = _vsub(points[k + 1], points[k - 1])
    q_hat = _vhat(q)
    if q_hat is None:
        raise NumericalDegeneracyError('Zero-length tangent vector', k)
    return q_hat


def tick_endpoints_3d(
    points: Sequence[Vec3],
    k: int,
    offset: float = TICK_OFFSET,
) -> tuple[list[float], list[float]]:
    """Stokes-space endpoints of the tick mark at sample k.

    The ends are s0 * (s_hat +/- offset * p_hat), where s0 = |s| and
    p_hat = normalize(s_hat x q_hat) is the in-plane normal to the path.

    Raises:
        NumericalDegeneracyError: On a zero-magnitude sample or when the
            tangent is parallel to the Stokes vector.
    """
    q_hat = tangent(points, k)
    s = points[k]
    s0 = _vnorm(s)
    if s0 == 0.0:
        raise NumericalDegeneracyError('Zero-magnitude Stokes vector at tick mark', k)
    s_hat = _vscl(1.0 / s0, s)
    p_hat = _vhat(_vcrss(s_hat, q_hat))
    if p_hat is None:
        raise NumericalDegeneracyError('Tangent parallel to Stokes vector at tick mark', k)
    a = _vscl(s0, _vlcom(1.0, s_hat, offset, p_hat))
    b = _vscl(s0, _vlcom(1.0, s_hat, -offset, p_hat))
    return a, b


def tick_segment(
    points: Sequence[Vec3],
    k: int,
    view: ViewState,
    offset: float = TICK_OFFSET,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Screen endpoints of the tick mark at sample k.

    Parameters:
        points: Trajectory samples.
        k: Sample index (0-based).
        view: View orientation.
        offset: Half-length of the tick in sphere radii.

    Returns:
        ((xa, ya), (xb, yb)).

    Raises:
        NumericalDegeneracyError: On degenerate geometry or a non-finite
            projected coordinate.
    """
    a, b = tick_endpoints_3d(points, k, offset)
    pa = project(a, view)
    pb = project(b, view)
    if not all(math.isfinite(c) for c in (*pa, *pb)):
        raise NumericalDegeneracyError('Non-finite tick mark coordinate', k)
    return pa, pb


def label_anchor(points: Sequence[Vec3], label: Label, view: ViewState) -> tuple[float, float]:
    """Screen position of the sample a label is attached to."""
    return project(points[label.index], view)
