"""Run parameters: view orientation, drawing style, arrows, axes, capacity limits."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from poincare_tools.constants import (
    DEFAULT_ARROW_HEADANGLE,
    DEFAULT_ARROW_STEPS,
    DEFAULT_ARROW_THICKNESS,
    DEFAULT_AXISLABELPOSITION,
    DEFAULT_AXISLABELS,
    DEFAULT_HIDDEN_GRAYTONE,
    DEFAULT_MAX_WHITENESS,
    DEFAULT_MIN_WHITENESS,
    DEFAULT_NEGATIVE_AXIS_LENGTH,
    DEFAULT_OUTFILENAME,
    DEFAULT_PATH_THICKNESS,
    DEFAULT_PHI_SOURCE_DEG,
    DEFAULT_PHI_STEPS,
    DEFAULT_POSITIVE_AXIS_LENGTH,
    DEFAULT_RHO_STEPS,
    DEFAULT_ROT_PHI_DEG,
    DEFAULT_ROT_PSI_DEG,
    DEFAULT_SCALEFACTOR,
    DEFAULT_THETA_SOURCE_DEG,
    DEFAULT_TICKSIZE,
    DEG2RAD,
    MAX_LABEL_TEXTLENGTH,
    MAX_NUM_ARROWS,
    MAX_NUM_LABELS,
    MAX_NUM_STOKE_COORDS,
    MAX_NUM_TICKMARKS,
    MAX_SHADING_CELLS,
    NORMALIZED_AXISLABELS,
)
from poincare_tools.errors import CapacityExceededError
from poincare_tools.trajectory import LabelPosition, Point3, parse_label_position


@dataclass(frozen=True)
class ViewState:
    """Sphere orientation and lighting (angles in radians).

    psi is the first rotation (about z), phi the second (about y). Whiteness
    values run from 0.0 (black) to 1.0 (white).
    """

    psi: float = DEFAULT_ROT_PSI_DEG * DEG2RAD
    phi: float = DEFAULT_ROT_PHI_DEG * DEG2RAD
    normalize: bool = False
    phi_source: float = DEFAULT_PHI_SOURCE_DEG * DEG2RAD
    theta_source: float = DEFAULT_THETA_SOURCE_DEG * DEG2RAD
    lower_whiteness: float = DEFAULT_MIN_WHITENESS
    upper_whiteness: float = DEFAULT_MAX_WHITENESS

    @classmethod
    def from_degrees(cls, psi_deg: float, phi_deg: float, **kwargs: object) -> ViewState:
        """Build a ViewState from rotation angles in degrees."""
        return cls(psi=psi_deg * DEG2RAD, phi=phi_deg * DEG2RAD, **kwargs)  # type: ignore[arg-type]

    def rotated(self, delta_psi: float, delta_phi: float) -> ViewState:
        """Return a copy with both rotation angles offset (radians)."""
        return replace(self, psi=self.psi + delta_psi, phi=self.phi + delta_phi)

    @property
    def light_direction(self) -> tuple[float, float, float]:
        """Unit vector from the sphere center toward the light source."""
        st = math.sin(self.theta_source)
        return (
            st * math.cos(self.phi_source),
            st * math.sin(self.phi_source),
            math.cos(self.theta_source),
        )


@dataclass(frozen=True)
class RenderStyle:
    """Presentation parameters for trajectories, ticks and arrows (pens in pt)."""

    path_thickness: float = DEFAULT_PATH_THICKNESS
    arrow_thickness: float = DEFAULT_ARROW_THICKNESS
    axis_thickness: float = DEFAULT_ARROW_THICKNESS
    arrow_head_angle: float = DEFAULT_ARROW_HEADANGLE
    draw_hidden_dashed: bool = False
    hidden_graytone: float = DEFAULT_HIDDEN_GRAYTONE
    use_bezier: bool = False
    draw_paths_as_arrows: bool = False
    reverse_arrow_paths: bool = False
    tick_size: float = DEFAULT_TICKSIZE

    @property
    def tick_thickness(self) -> float:
        """Pen for tick marks: half the path pen."""
        return self.path_thickness / 2.0


@dataclass(frozen=True)
class ArrowSpec:
    """Geodesic arrow between two Stokes points.

    dashed selects the line style; blackness runs from 0.0 (white) to 1.0
    (black).
    """

    start: Point3
    end: Point3
    dashed: bool = False
    blackness: float = 1.0
    steps: int = DEFAULT_ARROW_STEPS


def arrow_style_from_code(code: float) -> bool:
    """Map a numeric arrow type code to the dashed flag.

    Codes in [-0.5, 0.5) are solid and [0.5, 1.5) dashed.

    Parameters:
        code: Line type code.

    Returns:
        True for dashed, False for solid.

    Raises:
        ValueError: If the code is outside [-0.5, 1.5).
    """
    if -0.5 <= code < 0.5:
        return False
    if 0.5 <= code < 1.5:
        return True
    raise ValueError(f'Invalid arrow line type code {code} (0 = solid, 1 = dashed)')


def parse_arrow_spec(values: list[str] | list[float]) -> ArrowSpec:
    """Parse eight numbers (s1a s2a s3a s1b s2b s3b type blackness) into an ArrowSpec.

    Parameters:
        values: Eight numeric strings or floats.

    Returns:
        ArrowSpec.

    Raises:
        ValueError: On wrong count, non-numeric value, bad type code or
            blackness outside [0, 1].
    """
    if len(values) != 8:
        raise ValueError(f'Arrow needs 8 values (s1a s2a s3a s1b s2b s3b type blackness), got {len(values)}')
    try:
        nums = [float(v) for v in values]
    except ValueError:
        raise ValueError(f'Arrow values must be numbers: {" ".join(str(v) for v in values)}') from None
    if not all(math.isfinite(v) for v in nums):
        raise ValueError('Arrow values must be finite')
    dashed = arrow_style_from_code(nums[6])
    blackness = nums[7]
    if not 0.0 <= blackness <= 1.0:
        raise ValueError(f'Arrow blackness must be in [0, 1], got {blackness}')
    return ArrowSpec(
        start=Point3(nums[0], nums[1], nums[2]),
        end=Point3(nums[3], nums[4], nums[5]),
        dashed=dashed,
        blackness=blackness,
    )


@dataclass(frozen=True)
class AxisSpec:
    """One coordinate axis: label text (TeX math), placement and lengths.

    neg_length is the part drawn inside the sphere behind the origin and
    pos_length the distance of the arrow tip, both in sphere radii.
    """

    label: str | None
    position: LabelPosition = LabelPosition.UPPER_RIGHT
    neg_length: float = DEFAULT_NEGATIVE_AXIS_LENGTH
    pos_length: float = DEFAULT_POSITIVE_AXIS_LENGTH


def default_axes(normalize: bool = False) -> tuple[AxisSpec, AxisSpec, AxisSpec]:
    """Return the S1, S2, S3 axes with default labels."""
    labels = NORMALIZED_AXISLABELS if normalize else DEFAULT_AXISLABELS
    pos = parse_label_position(DEFAULT_AXISLABELPOSITION)
    return (
        AxisSpec(label=labels[0], position=pos),
        AxisSpec(label=labels[1], position=pos),
        AxisSpec(label=labels[2], position=pos),
    )


# Fixed label placements of the overlay x, y and z axes.
OVERLAY_AXIS_POSITIONS = (LabelPosition.BOTTOM, LabelPosition.BOTTOM, LabelPosition.TOP)


@dataclass(frozen=True)
class OverlayFrame:
    """Second coordinate frame rotated by (delta_psi, delta_phi) radians.

    Only axes with a label are drawn.
    """

    delta_psi: float
    delta_phi: float
    axes: tuple[AxisSpec, AxisSpec, AxisSpec] = field(
        default_factory=lambda: tuple(  # type: ignore[return-value]
            AxisSpec(label=None, position=p) for p in OVERLAY_AXIS_POSITIONS
        )
    )


@dataclass(frozen=True)
class Capacity:
    """Upper limits on input and grid sizes."""

    max_samples: int = MAX_NUM_STOKE_COORDS
    max_ticks: int = MAX_NUM_TICKMARKS
    max_labels: int = MAX_NUM_LABELS
    max_label_length: int = MAX_LABEL_TEXTLENGTH
    max_arrows: int = MAX_NUM_ARROWS
    max_shading_cells: int = MAX_SHADING_CELLS


@dataclass(frozen=True)
class MapParams:
    """Everything needed to build one Poincare map."""

    view: ViewState = field(default_factory=ViewState)
    style: RenderStyle = field(default_factory=RenderStyle)
    scalefactor: float = DEFAULT_SCALEFACTOR
    rho_steps: int = DEFAULT_RHO_STEPS
    phi_steps: int = DEFAULT_PHI_STEPS
    axes: tuple[AxisSpec, AxisSpec, AxisSpec] = field(default_factory=default_axes)
    draw_axes_inside: bool = False
    overlay: OverlayFrame | None = None
    arrows: tuple[ArrowSpec, ...] = ()
    input_file: str | None = None
    output_file: str = DEFAULT_OUTFILENAME
    aux_source: str | None = None
    eps_job_name: str | None = None
    command_line: tuple[str, ...] = ()
    capacity: Capacity = field(default_factory=Capacity)

    def __post_init__(self) -> None:
        if self.scalefactor <= 0.0:
            raise ValueError(f'Scale factor must be positive, got {self.scalefactor}')
        if self.rho_steps < 1 or self.phi_steps < 1:
            raise ValueError(
                f'Shading divisors must be at least 1, got {self.rho_steps} and {self.phi_steps}'
            )
        if len(self.arrows) > self.capacity.max_arrows:
            raise CapacityExceededError('arrows', self.capacity.max_arrows)


def parse_positive_int(value: str) -> int:
    """Parse a strictly positive integer (argparse type)."""
    try:
        n = int(float(value))
    except ValueError:
        raise ValueError(f'Expected a positive integer, got {value!r}') from None
    if n < 1:
        raise ValueError(f'Expected a positive integer, got {value!r}')
    return n


def parse_whiteness(value: str) -> float:
    """Parse a gray value in [0, 1] (argparse type)."""
    try:
        v = float(value)
    except ValueError:
        raise ValueError(f'Expected a number in [0, 1], got {value!r}') from None
    if not 0.0 <= v <= 1.0:
        raise ValueError(f'Expected a number in [0, 1], got {value!r}')
    return v


def parse_axis_labels(values: list[str]) -> tuple[AxisSpec, AxisSpec, AxisSpec]:
    """Parse six strings (label1 pos1 label2 pos2 label3 pos3) into axis specs.

    Lengths are left at their defaults; see with_axis_lengths().
    """
    if len(values) != 6:
        raise ValueError(f'Axis labels need 6 values (label pos, three times), got {len(values)}')
    return (
        AxisSpec(label=values[0], position=parse_label_position(values[1])),
        AxisSpec(label=values[2], position=parse_label_position(values[3])),
        AxisSpec(label=values[4], position=parse_label_position(values[5])),
    )


def parse_axis_lengths(values: list[str] | list[float]) -> tuple[tuple[float, float], ...]:
    """Parse six numbers (neg1 pos1 neg2 pos2 neg3 pos3) into (neg, pos) pairs."""
    if len(values) != 6:
        raise ValueError(f'Axis lengths need 6 values (neg pos, three times), got {len(values)}')
    try:
        nums = [float(v) for v in values]
    except ValueError:
        raise ValueError(f'Axis lengths must be numbers: {" ".join(str(v) for v in values)}') from None
    return ((nums[0], nums[1]), (nums[2], nums[3]), (nums[4], nums[5]))


def with_axis_lengths(
    axes: tuple[AxisSpec, AxisSpec, AxisSpec],
    lengths: tuple[tuple[float, float], ...],
) -> tuple[AxisSpec, AxisSpec, AxisSpec]:
    """Return axes with (neg_length, pos_length) replaced per axis."""
    return tuple(  # type: ignore[return-value]
        replace(a, neg_length=neg, pos_length=pos) for a, (neg, pos) in zip(axes, lengths)
    )
