"""Tests for the Input Parameters summary."""

from __future__ import annotations

from io import StringIO

from poincare_tools.input_params import write_input_parameters
from poincare_tools.params import ArrowSpec, MapParams, OverlayFrame
from poincare_tools.trajectory import Point3


def test_write_input_parameters_defaults() -> None:
    """Defaults are listed with file names and the view."""
    out = StringIO()
    write_input_parameters(out, MapParams(input_file='traj.dat'))
    s = out.getvalue()
    assert s.startswith('Input Parameters\n----------------\n')
    assert '  Input file: traj.dat' in s
    assert ' Output file: aout.mp' in s
    assert '  Rotation psi: -40 deg (about z)' in s
    assert '  Shading grid: 50 x 80' in s
    assert '  S1: S_1 [urt], lengths -0.1 .. 1.5' in s
    assert 'Arrows:' not in s
    assert 'Additional coordinate system' not in s


def test_write_input_parameters_overlay_and_arrows() -> None:
    """Overlay frames and arrows are listed when present."""
    arrow = ArrowSpec(start=Point3(1.0, 0.0, 0.0), end=Point3(0.0, 0.0, 1.0), dashed=True, blackness=0.5)
    params = MapParams(
        overlay=OverlayFrame(delta_psi=0.0, delta_phi=0.0),
        arrows=(arrow,),
        eps_job_name='fig',
    )
    out = StringIO()
    write_input_parameters(out, params)
    s = out.getvalue()
    assert '  EPS output: fig.eps' in s
    assert 'Additional coordinate system: delta psi 0 deg, delta phi 0 deg' in s
    assert '  x: (not drawn) [bot]' in s
    assert 'Arrows: 1' in s
    assert '   1: (1, 0, 0) -> (0, 0, 1) dashed, blackness 0.5' in s
