"""Equators and coordinate axes for the primary frame and the overlay frame."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poincare_tools.constants import EQUATOR_SAMPLES
from poincare_tools.rendering.projection import project, visibility_score

if TYPE_CHECKING:
    from poincare_tools.params import AxisSpec, ViewState
    from poincare_tools.trajectory import LabelPosition

logger = logging.getLogger(__name__)

_BASIS = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))

# Spanning vectors (u, v) of the plane S_k = 0, for k = 1, 2, 3.
_EQUATOR_PLANES = (
    (_BASIS[1], _BASIS[2]),
    (_BASIS[2], _BASIS[0]),
    (_BASIS[0], _BASIS[1]),
)


def equator_path(
    k: int,
    view: ViewState,
    samples: int = EQUATOR_SAMPLES,
) -> list[tuple[float, float]]:
    """Screen path of the front half of the great circle S_k = 0 (k = 0, 1, 2).

    The circle cos(t) u + sin(t) v has visibility score
    cos(t) score(u) + sin(t) score(v), largest at t0 = atan2(score(v), score(u));
    the half t0 - pi/2 .. t0 + pi/2 faces the viewer.
    """
    if samples < 2:
        raise ValueError(f'Equator needs at least 2 samples, got {samples}')
    u, v = _EQUATOR_PLANES[k]
    t0 = math.atan2(visibility_score(v, view), visibility_score(u, view))
    path: list[tuple[float, float]] = []
    for i in range(samples):
        t = t0 - math.pi / 2 + math.pi * i / (samples - 1)
        c, s = math.cos(t), math.sin(t)
        p = (c * u[0] + s * v[0], c * u[1] + s * v[1], c * u[2] + s * v[2])
        path.append(project(p, view, normalize=False))
    return path


def equator_paths(view: ViewState, samples: int = EQUATOR_SAMPLES) -> list[list[tuple[float, float]]]:
    """Front halves of the equators S_3 = 0, S_2 = 0 and S_1 = 0, in drawing order."""
    return [equator_path(k, view, samples) for k in (2, 1, 0)]


@dataclass(frozen=True)
class AxisGeometry:
    """Screen geometry of one coordinate axis (sphere radii).

    Attributes:
        intersection: Where the positive axis leaves the unit sphere.
        tip: Arrow tip, pos_length times the intersection.
        inside_start: Start of the dashed part behind the origin,
            -neg_length times the intersection.
        label: TeX math text placed at the tip, or None.
        position: Label placement.
    """

    intersection: tuple[float, float]
    tip: tuple[float, float]
    inside_start: tuple[float, float]
    label: str | None
    position: LabelPosition


def axis_geometry(k: int, axis: AxisSpec, view: ViewState) -> AxisGeometry:
    """Geometry of coordinate axis k (0, 1, 2) in the given view."""
    x, y = project(_BASIS[k], view, normalize=False)
    return AxisGeometry(
        intersection=(x, y),
        tip=(axis.pos_length * x, axis.pos_length * y),
        inside_start=(-axis.neg_length * x, -axis.neg_length * y),
        label=axis.label,
        position=axis.position,
    )


def frame_axes(
    axes: tuple[AxisSpec, AxisSpec, AxisSpec],
    view: ViewState,
    *,
    labelled_only: bool = False,
) -> list[AxisGeometry]:
    """Geometry of all axes of one frame.

    Parameters:
        axes: The three axis specs.
        view: View orientation of the frame.
        labelled_only: Skip axes without a label (overlay frame).

    Returns:
        Axis geometries in x, y, z order.
    """
    out: list[AxisGeometry] = []
    for k, axis in enumerate(axes):
        if labelled_only and not axis.label:
            logger.debug('Skipping unlabelled overlay axis %d', k + 1)
            continue
        out.append(axis_geometry(k, axis, view))
    return out
