"""Tests for the drawing model builder and MetaPost writer."""

from __future__ import annotations

import io
import math
from datetime import datetime
from pathlib import Path

import pytest

from poincare_tools.errors import DegenerateInputError, MalformedInputError
from poincare_tools.params import ArrowSpec, AxisSpec, MapParams, OverlayFrame, RenderStyle, ViewState
from poincare_tools.poincare_map import (
    build_drawing,
    generate_poincare_map,
    segment_trajectory,
    write_poincare_map,
)
from poincare_tools.rendering.metapost import MetaPostFile, write_metapost
from poincare_tools.rendering.primitives import (
    Comment,
    DrawingModel,
    FilledPolygon,
    StrokedPath,
    TextLabel,
)
from poincare_tools.trajectory import Label, LabelPosition, Point3, Trajectory

FRONT = ViewState(psi=0.0, phi=0.0)
CREATED = datetime(2024, 3, 5, 14, 7, 9)


def _params(**kwargs: object) -> MapParams:
    kwargs.setdefault('view', FRONT)
    kwargs.setdefault('rho_steps', 2)
    kwargs.setdefault('phi_steps', 3)
    return MapParams(**kwargs)  # type: ignore[arg-type]


def _section(model: DrawingModel, start: str, end: str) -> list[object]:
    """Primitives between two section comments."""
    texts = [p.text if isinstance(p, Comment) else None for p in model.primitives]
    i = texts.index(start)
    j = texts.index(end)
    return model.primitives[i + 1 : j]


HIDDEN = 'Hidden parts of the Stokes trajectories'
VISIBLE = 'Visible parts of the Stokes trajectories'
AXES = 'Draw the coordinate axes of the Poincare sphere'


def test_three_point_trajectory_front_view() -> None:
    """Two visible samples and one hidden end give one visible sub-path over all three."""
    traj = Trajectory(points=[Point3(1.0, 0.0, 0.0), Point3(0.0, 1.0, 0.0), Point3(-1.0, 0.0, 0.0)])
    model = build_drawing(_params(), [traj])
    assert _section(model, HIDDEN, VISIBLE) == []
    visible = _section(model, VISIBLE, AXES)
    assert len(visible) == 1
    path = visible[0]
    assert isinstance(path, StrokedPath)
    assert len(path.points) == 3
    assert path.points[1] == pytest.approx((1.0, 0.0))
    assert path.gray == 0.0
    assert not path.dashed
    assert path.arrow is None


def test_hidden_pass_precedes_all_visible() -> None:
    """Hidden parts of later trajectories are drawn before visible parts of earlier ones."""
    front = Trajectory(points=[Point3(1.0, 0.0, 0.0), Point3(0.9, 0.1, 0.0)])
    back = Trajectory(points=[Point3(-1.0, 0.0, 0.0), Point3(-0.9, 0.1, 0.0), Point3(-0.8, 0.2, 0.0)])
    model = build_drawing(_params(), [front, back])
    hidden = _section(model, HIDDEN, VISIBLE)
    visible = _section(model, VISIBLE, AXES)
    assert len(hidden) == 1
    assert isinstance(hidden[0], StrokedPath)
    assert len(hidden[0].points) == 3
    assert hidden[0].gray == pytest.approx(0.65)
    assert len(visible) == 1
    assert len(visible[0].points) == 2


def test_hidden_dashed_draws_black() -> None:
    """Dashed hidden runs use black instead of the hidden gray."""
    back = Trajectory(points=[Point3(-1.0, 0.0, 0.0), Point3(-0.9, 0.1, 0.0)])
    params = _params(style=RenderStyle(draw_hidden_dashed=True))
    (path,) = _section(build_drawing(params, [back]), HIDDEN, VISIBLE)
    assert path.dashed
    assert path.gray == 0.0


def test_hidden_tick_and_label_placement() -> None:
    """Hidden ticks go in the hidden pass; labels always go in the visible pass."""
    pts = [Point3(-math.cos(t), math.sin(t), 0.0) for t in (0.0, 0.1, 0.2)]
    traj = Trajectory(
        points=pts,
        tick_indices=[1],
        tick_labels=[Label(index=1, position=LabelPosition.TOP, text='$x$')],
    )
    model = build_drawing(_params(), [traj])
    hidden = _section(model, HIDDEN, VISIBLE)
    visible = _section(model, VISIBLE, AXES)
    ticks = [p for p in hidden if isinstance(p, StrokedPath) and len(p.points) == 2]
    assert len(ticks) == 1
    assert ticks[0].thickness == pytest.approx(0.5)
    assert ticks[0].gray == pytest.approx(0.65)
    labels = [p for p in visible if isinstance(p, TextLabel)]
    assert [lb.text for lb in labels] == ['$x$']
    assert not any(isinstance(p, TextLabel) for p in hidden)


def test_drawing_order_and_shading_count() -> None:
    """Shading cells come first and axes carry math-mode labels."""
    model = build_drawing(_params(rho_steps=3, phi_steps=4), [])
    assert model.count(FilledPolygon) == 12
    first_non_comment = next(p for p in model.primitives if not isinstance(p, Comment))
    assert isinstance(first_non_comment, FilledPolygon)
    labels = [p.text for p in model.primitives if isinstance(p, TextLabel)]
    assert labels == ['$S_1$', '$S_2$', '$S_3$']
    assert HIDDEN not in [p.text for p in model.primitives if isinstance(p, Comment)]


def test_path_arrow_on_last_subpath() -> None:
    """draw_paths_as_arrows marks only the sub-path that ends the trajectory."""
    params = _params(style=RenderStyle(draw_paths_as_arrows=True, reverse_arrow_paths=True))
    traj = Trajectory(points=[Point3(1.0, 0.0, 0.0), Point3(0.9, 0.1, 0.0), Point3(0.8, 0.2, 0.0)])
    (path,) = _section(build_drawing(params, [traj]), VISIBLE, AXES)
    assert path.arrow == 'reverse'
    assert path.head_angle == pytest.approx(30.0)


def test_metapost_label_line() -> None:
    """Labels are written with their placement suffix and radius scaling."""
    buf = io.StringIO()
    MetaPostFile(buf).label('$A$', (0.5, -0.25), 'top')
    assert buf.getvalue() == '   label.top(btex $A$ etex,(0.500000,-0.250000)*radius);\n'


def test_metapost_fill_polygon() -> None:
    """Shading cells are filled closed polygons."""
    buf = io.StringIO()
    MetaPostFile(buf).fill_polygon(((0.0, 0.0), (0.5, 0.0), (0.5, 0.5)), 0.5)
    assert buf.getvalue() == (
        '   fill ((0.0000,0.0000)--(0.5000,0.0000)--(0.5000,0.5000)--cycle)'
        ' scaled radius withcolor 0.500000 [black,white];\n'
    )


def test_metapost_stroke_sets_pen_once() -> None:
    """The pen is only picked up when its width changes."""
    buf = io.StringIO()
    mp = MetaPostFile(buf)
    path = StrokedPath(points=((0.0, 0.5), (0.5, 0.5)), thickness=1.0)
    mp.stroke_path(path)
    mp.stroke_path(path)
    text = buf.getvalue()
    assert text.count('pickup pencircle scaled 1.000000 pt;') == 1
    assert text.count('   draw p scaled radius withcolor black;') == 2


def test_metapost_stroke_skips_single_point() -> None:
    """Paths with fewer than two points are not written."""
    buf = io.StringIO()
    MetaPostFile(buf).stroke_path(StrokedPath(points=((0.0, 0.0),), thickness=1.0))
    assert buf.getvalue() == ''


def test_metapost_unknown_primitive() -> None:
    """Unknown objects are rejected."""
    with pytest.raises(TypeError):
        MetaPostFile(io.StringIO()).draw('not a primitive')  # type: ignore[arg-type]


def test_metapost_header_wraps_command_line() -> None:
    """Six command line arguments per header line."""
    buf = io.StringIO()
    MetaPostFile(buf).header('out.mp', 'in.dat', ['a', 'b', 'c', 'd', 'e', 'f', 'g', 'h'], CREATED)
    lines = buf.getvalue().splitlines()
    assert lines[0] == '% This Filename:  out.mp   [MetaPost source]'
    assert lines[1] == '% Creation time:  Tue Mar 05 14:07:09 2024'
    assert '%     a b c d e f' in lines
    assert '%     g h' in lines


def test_write_metapost_complete_file() -> None:
    """The file has a header, view variables and one closed figure."""
    traj = Trajectory(points=[Point3(1.0, 0.0, 0.0), Point3(0.0, 1.0, 0.0), Point3(-1.0, 0.0, 0.0)])
    params = _params(output_file='fig.mp', aux_source='extra.mp')
    model = build_drawing(params, [traj])
    buf = io.StringIO()
    write_poincare_map(buf, model, params, created=CREATED)
    text = buf.getvalue()
    assert text.startswith('% This Filename:  fig.mp')
    assert 'scalefactor := 6.000000 mm;' in text
    assert 'rot_psi := 0.000000;' in text
    assert text.count('beginfig(1);') == 1
    assert text.endswith('   input extra.mp\n   endfig;\nend\n')
    assert text.index(HIDDEN) < text.index(VISIBLE)
    assert 'withcolor 0.550000 [black,white];' in text


def test_write_metapost_arrow_styles() -> None:
    """User arrows: dashed, gray from blackness, head on the first half."""
    arrow = ArrowSpec(
        start=Point3(1.0, 0.0, 0.0), end=Point3(0.0, 1.0, 0.0), dashed=True, blackness=0.5
    )
    params = _params(arrows=(arrow,))
    buf = io.StringIO()
    write_metapost(buf, build_drawing(params, []), FRONT, output_name='a.mp', created=CREATED)
    text = buf.getvalue()
    assert '   drawarrow p scaled radius dashed evenly withcolor 0.500000 [black,white];' in text
    assert '   draw p scaled radius dashed evenly withcolor 0.500000 [black,white];' in text


def test_generate_poincare_map_writes_file(tmp_path: Path) -> None:
    """A valid input produces the MetaPost file."""
    src = tmp_path / 'in.dat'
    src.write_text('p b lft "A"\n1 0 0\n0 1 0 t\n0 0 1\nq e top "B"\n', encoding='utf-8')
    out = tmp_path / 'out.mp'
    model = generate_poincare_map(_params(input_file=str(src), output_file=str(out)))
    text = out.read_text(encoding='utf-8')
    assert text.rstrip().endswith('end')
    assert 'label.lft(btex A etex' in text
    assert 'label.top(btex B etex' in text
    assert model.count(TextLabel) == 5


def test_generate_poincare_map_error_writes_nothing(tmp_path: Path) -> None:
    """A parse error leaves no output file behind."""
    src = tmp_path / 'in.dat'
    src.write_text('p\n1 0 0\n0 1 0\n', encoding='utf-8')
    out = tmp_path / 'out.mp'
    with pytest.raises(MalformedInputError):
        generate_poincare_map(_params(input_file=str(src), output_file=str(out)))
    assert not out.exists()


def test_overlay_axes_only_labelled() -> None:
    """The overlay frame adds its equators and only its labelled axes."""
    overlay = OverlayFrame(
        delta_psi=0.5,
        delta_phi=0.0,
        axes=(
            AxisSpec(label=None, position=LabelPosition.BOTTOM),
            AxisSpec(label='W_2', position=LabelPosition.BOTTOM),
            AxisSpec(label=None, position=LabelPosition.TOP),
        ),
    )
    model = build_drawing(_params(overlay=overlay), [])
    comments = [p.text for p in model.primitives if isinstance(p, Comment)]
    assert "Draw the additional 'equators' of the rotated coordinate system" in comments
    assert 'Draw the axes of the additional coordinate system' in comments
    labels = [p.text for p in model.primitives if isinstance(p, TextLabel)]
    assert labels == ['$S_1$', '$S_2$', '$S_3$', '$W_2$']


def test_overlay_without_labels_draws_no_axes() -> None:
    """An overlay frame with no labels draws equators but no axes."""
    model = build_drawing(_params(overlay=OverlayFrame(delta_psi=0.5, delta_phi=0.0)), [])
    comments = [p.text for p in model.primitives if isinstance(p, Comment)]
    assert 'Draw the axes of the additional coordinate system' not in comments
    assert model.count(TextLabel) == 3


def test_zero_sample_error_names_sample_and_record() -> None:
    """A zero sample under normalization reports its index and record line."""
    traj = Trajectory(points=[Point3(1.0, 0.0, 0.0), Point3(0.0, 0.0, 0.0)], first_line=7)
    params = _params(view=ViewState(psi=0.0, phi=0.0, normalize=True))
    with pytest.raises(DegenerateInputError) as exc_info:
        segment_trajectory(traj, params)
    assert exc_info.value.index == 1
    assert exc_info.value.line == 7
    assert '(sample 1 of trajectory at line 7)' in str(exc_info.value)
