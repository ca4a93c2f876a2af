"""Great-circle arrows between two Stokes points."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from poincare_tools.constants import DEFAULT_ARROW_STEPS
from poincare_tools.errors import DegenerateInputError, NumericalDegeneracyError
from poincare_tools.rendering.projection import project
from poincare_tools.rendering.vec_math import Vec3, _vhat, _vlcom

if TYPE_CHECKING:
    from poincare_tools.params import ArrowSpec, ViewState


def _interpolate(a: Vec3, b: Vec3, t: float, k: int) -> list[float]:
    p = _vhat(_vlcom(1.0 - t, a, t, b))
    if p is None:
        raise NumericalDegeneracyError(f'Arrow endpoints are antipodal (t={t:g})', k)
    return p


def geodesic_arc(
    a: Vec3,
    b: Vec3,
    steps: int = DEFAULT_ARROW_STEPS,
) -> tuple[list[list[float]], list[list[float]]]:
    """Approximate the great-circle arc from a to b as two halves on the unit sphere.

    Points are (1 - t) * a_hat + t * b_hat renormalized, for t in [0, 0.5]
    (first half) and [0.5, 1] (second half), each with steps + 1 samples.
    The last point of the first half is the first point of the second.

    Parameters:
        a: Start point.
        b: End point.
        steps: Intervals per half.

    Returns:
        (first_half, second_half) as lists of unit vectors.

    Raises:
        ValueError: If steps is below 1.
        DegenerateInputError: If either endpoint has zero magnitude.
        NumericalDegeneracyError: If the endpoints are antipodal.
    """
    if steps < 1:
        raise ValueError(f'Arrow needs at least one step per half, got {steps}')
    a_hat = _vhat(a)
    b_hat = _vhat(b)
    if a_hat is None or b_hat is None:
        raise DegenerateInputError(f'Arrow endpoint has zero magnitude: {tuple(a)} -> {tuple(b)}')
    first = [_interpolate(a_hat, b_hat, 0.5 * k / steps, k) for k in range(steps + 1)]
    second = [first[-1]]
    second.extend(
        _interpolate(a_hat, b_hat, 0.5 + 0.5 * k / steps, steps + k) for k in range(1, steps + 1)
    )
    return first, second


def arrow_paths(
    spec: ArrowSpec,
    view: ViewState,
) -> tuple[list[tuple[float, float]], list[tuple[float, float]]]:
    """Screen paths of both halves of an arrow (first half carries the head)."""
    first, second = geodesic_arc(spec.start, spec.end, spec.steps)
    return _project_all(first, view), _project_all(second, view)


def _project_all(points: Sequence[Vec3], view: ViewState) -> list[tuple[float, float]]:
    return [project(p, view, normalize=False) for p in points]
