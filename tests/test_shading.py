"""Tests for the sphere shading field."""

from __future__ import annotations

import math

import pytest

from poincare_tools.errors import CapacityExceededError
from poincare_tools.params import ViewState
from poincare_tools.rendering.shading import shade, shade_grid, shading_cells


def test_shade_center_default_light() -> None:
    """At the disk center the normal points at the viewer."""
    view = ViewState()
    dot = math.cos(view.theta_source)
    expected = view.lower_whiteness + (view.upper_whiteness - view.lower_whiteness) * dot * dot
    assert shade(0.0, 0.0, view) == pytest.approx(expected)


def test_shade_light_at_viewer_is_brightest_at_center() -> None:
    """Light behind the observer gives the upper whiteness at the center."""
    view = ViewState(theta_source=0.0)
    assert shade(0.0, 0.0, view) == pytest.approx(view.upper_whiteness)


def test_shade_away_from_light_is_lower_bound() -> None:
    """Normals facing away from the light get the lower whiteness."""
    view = ViewState()
    assert shade(0.99, view.phi_source + math.pi, view) == view.lower_whiteness


def test_shade_within_bounds() -> None:
    """All cell values lie between the whiteness bounds."""
    view = ViewState()
    grid = shade_grid(view, 10, 16)
    assert grid.shape == (10, 16)
    assert float(grid.min()) >= view.lower_whiteness
    assert float(grid.max()) <= view.upper_whiteness + 1e-12


def test_shading_cells_count_and_first_cell() -> None:
    """The grid has rho_steps x phi_steps quadrilaterals starting at the center."""
    view = ViewState()
    cells = shading_cells(view, 5, 8)
    assert len(cells) == 40
    first = cells[0]
    assert len(first.corners) == 4
    assert first.corners[0] == pytest.approx((0.0, 0.0))
    assert first.corners[1] == pytest.approx((0.2, 0.0))
    d_phi = 2.0 * math.pi / 8
    assert first.corners[2] == pytest.approx((0.2 * math.cos(d_phi), 0.2 * math.sin(d_phi)))
    assert first.whiteness == pytest.approx(shade(0.1, d_phi / 2.0, view))


def test_shading_cells_outer_ring_reaches_rim() -> None:
    """Outer cells end on the unit circle."""
    cells = shading_cells(ViewState(), 4, 6)
    x, y = cells[-1].corners[2]
    assert math.hypot(x, y) == pytest.approx(1.0)


def test_shading_cells_capacity() -> None:
    """Too many cells raise CapacityExceededError."""
    with pytest.raises(CapacityExceededError):
        shading_cells(ViewState(), 100, 100, max_cells=9999)


def test_shading_cells_invalid_steps() -> None:
    """Zero steps are rejected."""
    with pytest.raises(ValueError):
        shading_cells(ViewState(), 0, 10)
