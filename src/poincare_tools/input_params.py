"""Input Parameters section: human-readable summary of a map request."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from poincare_tools.constants import RAD2DEG

if TYPE_CHECKING:
    from poincare_tools.params import AxisSpec, MapParams


def _w(stream: TextIO, line: str) -> None:
    """Write a line to the stream (helper for input parameters section)."""
    stream.write(line + '\n')


def _yes_no(flag: bool) -> str:
    return 'Yes' if flag else 'No'


def _axis_line(name: str, axis: AxisSpec) -> str:
    label = axis.label if axis.label else '(not drawn)'
    return (
        f'  {name}: {label} [{axis.position.value}],'
        f' lengths -{axis.neg_length:g} .. {axis.pos_length:g}'
    )


def write_input_parameters(stream: TextIO, params: MapParams) -> None:
    """Write the Input Parameters section for a Poincare map.

    Parameters:
        stream: Output text stream.
        params: Map parameters.
    """
    view = params.view
    style = params.style
    _w(stream, 'Input Parameters')
    _w(stream, '----------------')
    _w(stream, ' ')
    _w(stream, f'  Input file: {params.input_file or "(none)"}')
    _w(stream, f' Output file: {params.output_file}')
    if params.eps_job_name:
        _w(stream, f'  EPS output: {params.eps_job_name}.eps')
    if params.aux_source:
        _w(stream, f'  Aux source: {params.aux_source}')
    _w(stream, ' ')
    _w(stream, f'  Rotation psi: {RAD2DEG * view.psi:g} deg (about z)')
    _w(stream, f'  Rotation phi: {RAD2DEG * view.phi:g} deg (about y)')
    _w(stream, f'     Normalize: {_yes_no(view.normalize)}')
    _w(stream, f' Sphere radius: {params.scalefactor:g} mm')
    _w(stream, ' ')
    _w(
        stream,
        f'  Light source: phi {RAD2DEG * view.phi_source:g} deg,'
        f' theta {RAD2DEG * view.theta_source:g} deg',
    )
    _w(stream, f'       Shading: {view.lower_whiteness:g} .. {view.upper_whiteness:g}')
    _w(stream, f'  Shading grid: {params.rho_steps} x {params.phi_steps}')
    _w(stream, ' ')
    _w(stream, f'Path thickness: {style.path_thickness:g} pt')
    _w(stream, f'   Bezier mode: {_yes_no(style.use_bezier)}')
    _w(stream, f' Hidden dashed: {_yes_no(style.draw_hidden_dashed)}')
    _w(stream, f'   Hidden gray: {style.hidden_graytone:g}')
    _w(stream, f'   Path arrows: {_yes_no(style.draw_paths_as_arrows)}'
       + (' (reversed)' if style.reverse_arrow_paths else ''))
    _w(stream, ' ')
    _w(stream, 'Coordinate axes:')
    for name, axis in zip(('S1', 'S2', 'S3'), params.axes):
        _w(stream, _axis_line(name, axis))
    _w(stream, f'  Inside sphere: {_yes_no(params.draw_axes_inside)}')
    if params.overlay is not None:
        _w(
            stream,
            f'Additional coordinate system: delta psi {RAD2DEG * params.overlay.delta_psi:g} deg,'
            f' delta phi {RAD2DEG * params.overlay.delta_phi:g} deg',
        )
        for name, axis in zip(('x', 'y', 'z'), params.overlay.axes):
            _w(stream, _axis_line(name, axis))
    if params.arrows:
        _w(stream, ' ')
        _w(stream, f'Arrows: {len(params.arrows)}')
        for i, a in enumerate(params.arrows, start=1):
            _w(
                stream,
                f'  {i:2d}: ({a.start.s1:g}, {a.start.s2:g}, {a.start.s3:g})'
                f' -> ({a.end.s1:g}, {a.end.s2:g}, {a.end.s3:g})'
                f' {"dashed" if a.dashed else "solid"}, blackness {a.blackness:g}',
            )
    _w(stream, ' ')
