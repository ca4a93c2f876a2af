"""Tests for the matplotlib preview."""

from __future__ import annotations

from pathlib import Path

import pytest

from poincare_tools.params import MapParams, ViewState
from poincare_tools.poincare_map import build_drawing
from poincare_tools.trajectory import Label, LabelPosition, Point3, Trajectory


def test_preview_png(tmp_path: Path) -> None:
    """A map with every primitive kind renders to PNG."""
    pytest.importorskip('matplotlib')
    from poincare_tools.rendering.matplotlib_view import draw_poincare_map_mpl

    traj = Trajectory(
        points=[Point3(1.0, 0.0, 0.0), Point3(0.7, 0.7, 0.0), Point3(0.0, 1.0, 0.0)],
        tick_indices=[1],
        tick_labels=[Label(index=1, position=LabelPosition.LOWER_LEFT, text='B')],
    )
    params = MapParams(view=ViewState(), rho_steps=3, phi_steps=6, draw_axes_inside=True)
    model = build_drawing(params, [traj])
    out = tmp_path / 'preview.png'
    draw_poincare_map_mpl(model, str(out))
    assert out.exists()
    assert out.stat().st_size > 0
