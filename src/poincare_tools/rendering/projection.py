"""Frame transform and front/back visibility for a rotated sphere.

The view is parallel (orthographic) after two rotations: psi about the z axis,
then phi about the y axis. Screen coordinates are in sphere radii; the
emission layer scales them by the sphere radius.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from poincare_tools.errors import DegenerateInputError
from poincare_tools.rendering.vec_math import Vec3, _vnorm

if TYPE_CHECKING:
    from poincare_tools.params import ViewState


def project(
    p: Vec3,
    view: ViewState,
    *,
    normalize: bool | None = None,
) -> tuple[float, float]:
    """Project a Stokes point onto the 2-D view plane.

    x = s1 sin(psi) + s2 cos(psi)
    y = -s1 cos(psi) sin(phi) + s2 sin(psi) sin(phi) + s3 cos(phi)

    Parameters:
        p: Point (s1, s2, s3).
        view: View orientation.
        normalize: Divide by |p| first; None means view.normalize.

    Returns:
        Screen coordinates (x, y).

    Raises:
        DegenerateInputError: If normalizing a zero-magnitude point.
    """
    s1, s2, s3 = p[0], p[1], p[2]
    sin_psi = math.sin(view.psi)
    cos_psi = math.cos(view.psi)
    sin_phi = math.sin(view.phi)
    cos_phi = math.cos(view.phi)
    x = s1 * sin_psi + s2 * cos_psi
    y = -s1 * cos_psi * sin_phi + s2 * sin_psi * sin_phi + s3 * cos_phi
    if view.normalize if normalize is None else normalize:
        n = _vnorm(p)
        if n == 0.0:
            raise DegenerateInputError(f'Cannot normalize zero Stokes vector {tuple(p)}')
        x /= n
        y /= n
    return (x, y)


def visibility_score(p: Vec3, view: ViewState) -> float:
    """Signed component of p along the viewer direction.

    s1 cos(psi) cos(phi) - s2 sin(psi) cos(phi) + s3 sin(phi)
    """
    cos_phi = math.cos(view.phi)
    return (
        p[0] * math.cos(view.psi) * cos_phi
        - p[1] * math.sin(view.psi) * cos_phi
        + p[2] * math.sin(view.phi)
    )


def is_visible(p: Vec3, view: ViewState) -> bool:
    """True if p lies on the front hemisphere; points on the terminator count as visible."""
    return visibility_score(p, view) >= 0.0


def classify(points: list[Vec3] | tuple[Vec3, ...], view: ViewState) -> list[bool]:
    """Return the visibility flag of each point."""
    return [is_visible(p, view) for p in points]
