"""Tests for tick mark geometry and label anchors."""

from __future__ import annotations

import math

import pytest

from poincare_tools.constants import TICK_OFFSET
from poincare_tools.errors import NumericalDegeneracyError
from poincare_tools.params import ViewState
from poincare_tools.rendering.projection import project
from poincare_tools.rendering.ticks import label_anchor, tangent, tick_endpoints_3d, tick_segment
from poincare_tools.trajectory import Label, LabelPosition

EQUATOR = [(math.cos(t), math.sin(t), 0.0) for t in (0.0, 0.1, 0.2, 0.3)]


def test_tangent_central_and_one_sided() -> None:
    """Interior samples use a central difference; ends use one-sided ones."""
    pts = [(0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (3.0, 0.0, 1.0)]
    assert tangent(pts, 0) == pytest.approx([1.0, 0.0, 0.0])
    assert tangent(pts, 1) == pytest.approx([1.0, 0.0, 0.0])
    assert tangent(pts, 2) == pytest.approx([1.0, 0.0, 0.0])


def test_tick_normal_to_equator_is_along_s3() -> None:
    """Along the S3 = 0 equator the tick runs parallel to S3."""
    a, b = tick_endpoints_3d(EQUATOR, 1)
    assert a[2] == pytest.approx(TICK_OFFSET)
    assert b[2] == pytest.approx(-TICK_OFFSET)
    assert a[0] == pytest.approx(math.cos(0.1))
    assert a[1] == pytest.approx(math.sin(0.1))


def test_tick_scaled_by_sample_magnitude() -> None:
    """Tick ends sit on the sampled radius, not the unit sphere."""
    pts = [(2.0 * x, 2.0 * y, 2.0 * z) for x, y, z in EQUATOR]
    a, b = tick_endpoints_3d(pts, 2)
    assert a[2] == pytest.approx(2.0 * TICK_OFFSET)
    assert b[2] == pytest.approx(-2.0 * TICK_OFFSET)


def test_tick_segment_symmetric_about_sample() -> None:
    """Projected tick ends are equidistant from the projected sample."""
    view = ViewState(psi=math.radians(-40.0), phi=math.radians(15.0))
    for k in range(len(EQUATOR)):
        (xa, ya), (xb, yb) = tick_segment(EQUATOR, k, view)
        x0, y0 = project(EQUATOR[k], view)
        assert (xa + xb) / 2.0 == pytest.approx(x0)
        assert (ya + yb) / 2.0 == pytest.approx(y0)
        assert math.hypot(xa - x0, ya - y0) == pytest.approx(math.hypot(xb - x0, yb - y0))


def test_tick_tangent_parallel_to_radius_raises() -> None:
    """A radial trajectory has no in-plane normal."""
    pts = [(1.0, 0.0, 0.0), (2.0, 0.0, 0.0), (3.0, 0.0, 0.0)]
    with pytest.raises(NumericalDegeneracyError) as exc_info:
        tick_endpoints_3d(pts, 1)
    assert exc_info.value.index == 1


def test_tick_repeated_samples_raise() -> None:
    """Identical neighbours give a zero tangent."""
    pts = [(1.0, 0.0, 0.0), (1.0, 0.0, 0.0)]
    with pytest.raises(NumericalDegeneracyError):
        tangent(pts, 0)


def test_tick_single_sample_raises() -> None:
    """A tick on a one-sample trajectory is degenerate."""
    with pytest.raises(NumericalDegeneracyError):
        tick_segment([(1.0, 0.0, 0.0)], 0, ViewState())


def test_tick_zero_sample_raises() -> None:
    """A zero-magnitude sample has no direction."""
    pts = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)]
    with pytest.raises(NumericalDegeneracyError):
        tick_endpoints_3d(pts, 0)


def test_label_anchor_is_projected_sample() -> None:
    """Labels are anchored at their sample's screen position."""
    view = ViewState(psi=0.0, phi=0.0)
    label = Label(index=2, position=LabelPosition.TOP, text='A')
    assert label_anchor(EQUATOR, label, view) == project(EQUATOR[2], view)


def test_tick_segment_very_large_samples() -> None:
    """Huge sample magnitudes give the same normalized tick as unit samples."""
    view = ViewState(psi=0.0, phi=0.0, normalize=True)
    unit = [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    big = [(1e200 * x, 1e200 * y, 1e200 * z) for x, y, z in unit]
    (xa, ya), (xb, yb) = tick_segment(big, 1, view)
    (ua, va), (ub, vb) = tick_segment(unit, 1, view)
    assert (xa, ya) == pytest.approx((ua, va))
    assert (xb, yb) == pytest.approx((ub, vb))
    assert ya == pytest.approx(-yb)
