"""MetaPost output: header, view variables and drawing primitives."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from poincare_tools.constants import PROGRAM_NAME, RAD2DEG
from poincare_tools.rendering.path_record import PathRecord
from poincare_tools.rendering.primitives import (
    Comment,
    FilledPolygon,
    Include,
    StrokedPath,
    TextLabel,
)

if TYPE_CHECKING:
    from poincare_tools.params import ViewState
    from poincare_tools.rendering.primitives import DrawingModel, Point2, Primitive

# Command line arguments per header comment line.
_ARGS_PER_LINE = 6


def _color(gray: float) -> str:
    """MetaPost color clause for a whiteness value."""
    if gray == 0.0:
        return 'withcolor black'
    return f'withcolor {gray:f} [black,white]'


class MetaPostFile:
    """MetaPost device: header, figure frame, pens, paths, fills and labels."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pen: float | None = None
        self._head_angle: float | None = None

    def _emit(self, s: str) -> None:
        self._stream.write(s + '\n')

    def header(
        self,
        output_name: str,
        input_name: str | None,
        command_line: tuple[str, ...] | list[str] = (),
        created: datetime | None = None,
    ) -> None:
        """Write the leading comment block (file names, time, command line)."""
        created = created or datetime.now()
        self._emit(f'% This Filename:  {output_name}   [MetaPost source]')
        self._emit(f'% Creation time:  {created.strftime("%a %b %d %H:%M:%S %Y")}')
        self._emit('%')
        self._emit(f'% Input Filename [Stokes parameters]:  {input_name or "(none)"}')
        self._emit(f'% This MetaPost source code was automatically generated by {PROGRAM_NAME}')
        self._emit('% Full set of command line options that generated this code:')
        args = list(command_line)
        for i in range(0, len(args), _ARGS_PER_LINE):
            self._emit('%    ' + ''.join(f' {a}' for a in args[i : i + _ARGS_PER_LINE]))
        self._emit('%')
        self._emit('% Description:  Map of Stokes parameters, visualized as trajectories')
        self._emit('%               onto the Poincare sphere. Compile with MetaPost:')
        self._emit(f'%                  mpost {output_name}')
        self._emit('%')

    def view_specs(self, view: ViewState, radius_mm: float) -> None:
        """Write the sphere radius and the rotation and light source angles."""
        psi_deg = RAD2DEG * view.psi
        phi_deg = RAD2DEG * view.phi
        self._emit(f'scalefactor := {radius_mm:f} mm;')
        self._emit(f'rot_psi := {psi_deg:f};  % Rotation angle round z-axis (first rotation)')
        self._emit(f'rot_phi := {phi_deg:f};  % Rotation angle round y-axis (second rotation)')
        self._emit(f'phi_source := {RAD2DEG * view.phi_source:f};')
        self._emit(f'theta_source := {RAD2DEG * view.theta_source:f};')
        self._emit(f'upper_value := {view.upper_whiteness:f};')
        self._emit(f'lower_value := {view.lower_whiteness:f};')
        self._emit('radius := scalefactor;')

    def begin_figure(self) -> None:
        """Open figure 1 and declare the scratch path."""
        self._emit('beginfig(1);')
        self._emit('  path p;')
        self._emit('  oldahangle := ahangle;')
        self._pen = None
        self._head_angle = None

    def end_figure(self) -> None:
        """Close the figure and the file."""
        self._emit('   endfig;')
        self._emit('end')

    def set_pen(self, thickness: float) -> None:
        """Pick up a round pen of the given width in pt (only when it changes)."""
        if self._pen != thickness:
            self._emit(f'   pickup pencircle scaled {thickness:f} pt;')
            self._pen = thickness

    def set_head_angle(self, angle: float | None) -> None:
        """Set the arrowhead angle in degrees; None restores the MetaPost default."""
        if angle == self._head_angle:
            return
        if angle is None:
            self._emit('   ahangle := oldahangle;')
        else:
            self._emit(f'   ahangle := {angle:f};')
        self._head_angle = angle

    def comment(self, text: str) -> None:
        """Write a section comment."""
        self._emit('%')
        for line in text.splitlines() or ['']:
            self._emit(f'% {line}')
        self._emit('%')

    def fill_polygon(self, points: tuple[Point2, ...], gray: float) -> None:
        """Fill a closed polygon."""
        coords = '--'.join(f'({x:.4f},{y:.4f})' for x, y in points)
        self._emit(f'   fill ({coords}--cycle) scaled radius {_color(gray)};')

    def stroke_path(self, path: StrokedPath) -> None:
        """Stroke an open path, optionally dashed and with an arrowhead."""
        if len(path.points) < 2:
            return
        self.set_pen(path.thickness)
        if path.arrow is not None:
            self.set_head_angle(path.head_angle)
        record = PathRecord(smooth=path.smooth)
        for x, y in path.points:
            record.append(x, y)
        record.write(self._stream)
        if path.arrow == 'forward':
            cmd = '   drawarrow p scaled radius'
        elif path.arrow == 'reverse':
            cmd = '   drawarrow reverse p scaled radius'
        else:
            cmd = '   draw p scaled radius'
        if path.dashed:
            cmd += ' dashed evenly'
        self._emit(f'{cmd} {_color(path.gray)};')

    def label(self, text: str, anchor: Point2, suffix: str) -> None:
        """Place typeset text next to an anchor point."""
        x, y = anchor
        self._emit(f'   label.{suffix}(btex {text} etex,({x:f},{y:f})*radius);')

    def include(self, path: str) -> None:
        """Read in an external MetaPost file at this point."""
        self.comment(f'The following external file is included:\n   {path}  [MetaPost source]')
        self._emit(f'   input {path}')

    def draw(self, primitive: Primitive) -> None:
        """Write any drawing primitive."""
        if isinstance(primitive, FilledPolygon):
            self.fill_polygon(primitive.points, primitive.gray)
        elif isinstance(primitive, StrokedPath):
            self.stroke_path(primitive)
        elif isinstance(primitive, TextLabel):
            self.label(primitive.text, primitive.anchor, primitive.position.value)
        elif isinstance(primitive, Comment):
            self.comment(primitive.text)
        elif isinstance(primitive, Include):
            self.include(primitive.path)
        else:
            raise TypeError(f'Unknown drawing primitive {type(primitive).__name__}')


def write_metapost(
    stream: TextIO,
    model: DrawingModel,
    view: ViewState,
    *,
    output_name: str,
    input_name: str | None = None,
    command_line: tuple[str, ...] | list[str] = (),
    created: datetime | None = None,
) -> None:
    """Write a complete MetaPost file for a drawing model.

    Parameters:
        stream: Output text stream.
        model: Primitives in drawing order.
        view: View whose angles are recorded in the file.
        output_name: File name shown in the header.
        input_name: Trajectory file name shown in the header.
        command_line: Arguments shown in the header.
        created: Creation time (default now).
    """
    mp = MetaPostFile(stream)
    mp.header(output_name, input_name, command_line, created)
    mp.view_specs(view, model.radius_mm)
    mp.begin_figure()
    for primitive in model.primitives:
        mp.draw(primitive)
    mp.end_figure()
