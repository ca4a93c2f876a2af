"""Matplotlib preview of a drawing model (alternative to MetaPost). Requires matplotlib."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from poincare_tools.rendering.primitives import FilledPolygon, StrokedPath, TextLabel
from poincare_tools.trajectory import LabelPosition

if TYPE_CHECKING:
    from poincare_tools.rendering.primitives import DrawingModel

logger = logging.getLogger(__name__)

# Label placement -> (dx, dy) offset in points and text alignment (ha, va).
_LABEL_OFFSETS: dict[LabelPosition, tuple[float, float, str, str]] = {
    LabelPosition.TOP: (0.0, 3.0, 'center', 'bottom'),
    LabelPosition.BOTTOM: (0.0, -3.0, 'center', 'top'),
    LabelPosition.LEFT: (-3.0, 0.0, 'right', 'center'),
    LabelPosition.RIGHT: (3.0, 0.0, 'left', 'center'),
    LabelPosition.UPPER_LEFT: (-3.0, 3.0, 'right', 'bottom'),
    LabelPosition.UPPER_RIGHT: (3.0, 3.0, 'left', 'bottom'),
    LabelPosition.LOWER_LEFT: (-3.0, -3.0, 'right', 'top'),
    LabelPosition.LOWER_RIGHT: (3.0, -3.0, 'left', 'top'),
}

_MM_PER_INCH = 25.4


def draw_poincare_map_mpl(model: DrawingModel, output_path: str | None = None) -> None:
    """Render a drawing model with matplotlib (Agg) and save it if a path is given.

    Pens are in pt, coordinates in sphere radii scaled by model.radius_mm.
    The file format follows the output path suffix (.png, .pdf, .svg, ...).
    """
    try:
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError('matplotlib is required for draw_poincare_map_mpl') from None

    side_in = 4.0 * model.radius_mm / _MM_PER_INCH
    fig, ax = plt.subplots(figsize=(side_in, side_in))
    ax.set_aspect('equal')
    ax.set_axis_off()
    z = 0
    for prim in model.primitives:
        z += 1
        if isinstance(prim, FilledPolygon):
            xs = [p[0] for p in prim.points]
            ys = [p[1] for p in prim.points]
            c = str(prim.gray)
            ax.fill(xs, ys, facecolor=c, edgecolor=c, linewidth=0.3, zorder=z)
        elif isinstance(prim, StrokedPath):
            xs = [p[0] for p in prim.points]
            ys = [p[1] for p in prim.points]
            c = str(prim.gray)
            style = '--' if prim.dashed else '-'
            ax.plot(xs, ys, style, color=c, linewidth=prim.thickness, zorder=z)
            if prim.arrow is not None and len(prim.points) >= 2:
                if prim.arrow == 'forward':
                    head, tail = prim.points[-1], prim.points[-2]
                else:
                    head, tail = prim.points[0], prim.points[1]
                ax.annotate(
                    '',
                    xy=head,
                    xytext=tail,
                    arrowprops={'arrowstyle': '-|>', 'color': c, 'linewidth': prim.thickness},
                    zorder=z,
                )
        elif isinstance(prim, TextLabel):
            dx, dy, ha, va = _LABEL_OFFSETS[prim.position]
            ax.annotate(
                prim.text,
                xy=prim.anchor,
                xytext=(dx, dy),
                textcoords='offset points',
                ha=ha,
                va=va,
                fontsize=8,
                zorder=z,
            )
    ax.autoscale_view()
    if output_path:
        fig.savefig(output_path, bbox_inches='tight')
        logger.debug('Wrote preview %s', output_path)
    plt.close(fig)
