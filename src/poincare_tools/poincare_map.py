"""Poincare map generator: trajectories, shading, axes and arrows to a drawing model.

The whole figure is computed in memory before anything is written, so a
failure part way through leaves no partial output. Hidden sub-paths of all
trajectories are drawn before the visible sub-paths of any trajectory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from poincare_tools.constants import AXIS_INSIDE_WHITENESS, EQUATOR_WHITENESS
from poincare_tools.errors import DegenerateInputError
from poincare_tools.rendering.arrows import arrow_paths
from poincare_tools.rendering.axes import AxisGeometry, equator_paths, frame_axes
from poincare_tools.rendering.metapost import write_metapost
from poincare_tools.rendering.primitives import (
    DrawingModel,
    FilledPolygon,
    Include,
    Primitive,
    StrokedPath,
    TextLabel,
)
from poincare_tools.rendering.projection import classify, project
from poincare_tools.rendering.segments import Run, RunKind, find_runs, subpaths
from poincare_tools.rendering.shading import shading_cells
from poincare_tools.rendering.ticks import label_anchor, tick_segment
from poincare_tools.trajectory_reader import read_trajectory_file

if TYPE_CHECKING:
    from poincare_tools.params import MapParams
    from poincare_tools.trajectory import Trajectory

logger = logging.getLogger(__name__)


@dataclass
class SegmentedTrajectory:
    """A trajectory with its screen points, visibility flags, runs and tick marks."""

    trajectory: Trajectory
    screen: list[tuple[float, float]]
    visible: list[bool]
    runs: list[Run]
    ticks: list[tuple[int, tuple[float, float], tuple[float, float]]] = field(default_factory=list)

    def hidden_subpaths(self) -> list[Run]:
        return subpaths(self.runs, RunKind.HIDDEN)

    def visible_subpaths(self) -> list[Run]:
        return subpaths(self.runs, RunKind.VISIBLE)


def segment_trajectory(traj: Trajectory, params: MapParams) -> SegmentedTrajectory:
    """Project, classify and split one trajectory; compute its tick marks.

    Raises:
        DegenerateInputError: On a zero sample with normalization on (carries
            the sample index and the first line of the trajectory).
        NumericalDegeneracyError: On degenerate tick geometry.
    """
    view = params.view
    screen: list[tuple[float, float]] = []
    for k, p in enumerate(traj.points):
        try:
            screen.append(project(p, view))
        except DegenerateInputError as e:
            raise DegenerateInputError(str(e), k, traj.first_line) from None
    visible = classify(traj.points, view)
    runs = find_runs(visible, draw_as_arrow=params.style.draw_paths_as_arrows)
    ticks = []
    for k in traj.tick_indices:
        pa, pb = tick_segment(traj.points, k, view)
        ticks.append((k, pa, pb))
    return SegmentedTrajectory(trajectory=traj, screen=screen, visible=visible, runs=runs, ticks=ticks)


def _run_path(seg: SegmentedTrajectory, run: Run, params: MapParams) -> StrokedPath:
    style = params.style
    arrow = None
    if run.arrow:
        arrow = 'reverse' if style.reverse_arrow_paths else 'forward'
    if run.kind is RunKind.HIDDEN:
        dashed = style.draw_hidden_dashed
        gray = 0.0 if dashed else style.hidden_graytone
    else:
        dashed = False
        gray = 0.0
    return StrokedPath(
        points=tuple(seg.screen[i] for i in run.indices),
        thickness=style.path_thickness,
        gray=gray,
        dashed=dashed,
        smooth=style.use_bezier,
        arrow=arrow,
        head_angle=style.arrow_head_angle if arrow else None,
    )


def _pass_primitives(seg: SegmentedTrajectory, kind: RunKind, params: MapParams) -> list[Primitive]:
    """Sub-paths, tick marks and (visible pass only) labels of one trajectory."""
    style = params.style
    out: list[Primitive] = []
    runs = seg.hidden_subpaths() if kind is RunKind.HIDDEN else seg.visible_subpaths()
    out.extend(_run_path(seg, r, params) for r in runs)
    want_visible = kind is RunKind.VISIBLE
    for k, pa, pb in seg.ticks:
        if seg.visible[k] != want_visible:
            continue
        out.append(
            StrokedPath(
                points=(pa, pb),
                thickness=style.tick_thickness,
                gray=0.0 if want_visible else style.hidden_graytone,
            )
        )
    if want_visible:
        for label in seg.trajectory.labels:
            anchor = label_anchor(seg.trajectory.points, label, params.view)
            out.append(TextLabel(text=label.text, anchor=anchor, position=label.position))
    return out


def _axis_primitives(geoms: list[AxisGeometry], params: MapParams) -> list[Primitive]:
    thickness = params.style.axis_thickness
    out: list[Primitive] = []
    for g in geoms:
        if params.draw_axes_inside:
            out.append(
                StrokedPath(
                    points=(g.inside_start, g.intersection),
                    thickness=thickness,
                    gray=AXIS_INSIDE_WHITENESS,
                    dashed=True,
                )
            )
        out.append(StrokedPath(points=(g.intersection, g.tip), thickness=thickness, arrow='forward'))
        if g.label:
            out.append(TextLabel(text=f'${g.label}$', anchor=g.tip, position=g.position))
    return out


def _equator_primitives(view_paths: list[list[tuple[float, float]]], thickness: float) -> list[Primitive]:
    return [
        StrokedPath(points=tuple(path), thickness=thickness, gray=EQUATOR_WHITENESS, smooth=True)
        for path in view_paths
    ]


def build_drawing(params: MapParams, trajectories: list[Trajectory]) -> DrawingModel:
    """Compute every drawing primitive of the map, in drawing order.

    Order: shaded sphere, equators (primary then overlay), hidden pass of all
    trajectories, visible pass of all trajectories, arrows, coordinate axes,
    overlay axes, auxiliary include.

    Parameters:
        params: Map parameters.
        trajectories: Parsed trajectories.

    Returns:
        DrawingModel.
    """
    view = params.view
    style = params.style
    model = DrawingModel(radius_mm=params.scalefactor)

    model.comment('Draw the shaded Poincare sphere projected on 2D screen coordinates')
    for cell in shading_cells(view, params.rho_steps, params.phi_steps, params.capacity.max_shading_cells):
        model.add(FilledPolygon(points=cell.corners, gray=cell.whiteness))

    model.comment("Draw the 'equators' of the Poincare sphere")
    model.extend(_equator_primitives(equator_paths(view), style.axis_thickness))
    overlay_geoms: list[AxisGeometry] = []
    if params.overlay is not None:
        overlay_view = view.rotated(params.overlay.delta_psi, params.overlay.delta_phi)
        model.comment("Draw the additional 'equators' of the rotated coordinate system")
        model.extend(_equator_primitives(equator_paths(overlay_view), style.axis_thickness))
        overlay_geoms = frame_axes(params.overlay.axes, overlay_view, labelled_only=True)

    segmented = [segment_trajectory(t, params) for t in trajectories]
    if segmented:
        model.comment('Hidden parts of the Stokes trajectories')
        for seg in segmented:
            model.extend(_pass_primitives(seg, RunKind.HIDDEN, params))
        model.comment('Visible parts of the Stokes trajectories')
        for seg in segmented:
            model.extend(_pass_primitives(seg, RunKind.VISIBLE, params))

    if params.arrows:
        model.comment('Draw the paths of the arrows specified by the user.')
        for spec in params.arrows:
            first, second = arrow_paths(spec, view)
            gray = 1.0 - spec.blackness
            model.add(
                StrokedPath(
                    points=tuple(first),
                    thickness=style.arrow_thickness,
                    gray=gray,
                    dashed=spec.dashed,
                    smooth=True,
                    arrow='forward',
                )
            )
            model.add(
                StrokedPath(
                    points=tuple(second),
                    thickness=style.arrow_thickness,
                    gray=gray,
                    dashed=spec.dashed,
                    smooth=True,
                )
            )

    model.comment('Draw the coordinate axes of the Poincare sphere')
    model.extend(_axis_primitives(frame_axes(params.axes, view), params))
    if overlay_geoms:
        model.comment('Draw the axes of the additional coordinate system')
        model.extend(_axis_primitives(overlay_geoms, params))

    if params.aux_source:
        model.add(Include(params.aux_source))

    logger.info(
        'Map: %d trajectories, %d primitives', len(segmented), len(model.primitives)
    )
    return model


def load_trajectories(params: MapParams) -> list[Trajectory]:
    """Read the trajectory file named in params (empty list if none)."""
    if not params.input_file:
        return []
    trajectories = read_trajectory_file(params.input_file, params.capacity)
    logger.info('Read %d trajectories from %s', len(trajectories), params.input_file)
    return trajectories


def write_poincare_map(
    stream: TextIO,
    model: DrawingModel,
    params: MapParams,
    created: datetime | None = None,
) -> None:
    """Write the MetaPost source of a computed map."""
    write_metapost(
        stream,
        model,
        params.view,
        output_name=params.output_file,
        input_name=params.input_file,
        command_line=params.command_line,
        created=created,
    )


def generate_poincare_map(params: MapParams) -> DrawingModel:
    """Read input, compute the map and write params.output_file.

    Returns:
        The computed DrawingModel (for previews and summaries).

    Raises:
        MalformedInputError, CapacityExceededError, NumericalDegeneracyError,
        DegenerateInputError: Nothing is written when any of these is raised.
    """
    trajectories = load_trajectories(params)
    model = build_drawing(params, trajectories)
    with open(params.output_file, 'w', encoding='utf-8') as f:
        write_poincare_map(f, model, params)
    logger.info('Wrote %s', params.output_file)
    return model
