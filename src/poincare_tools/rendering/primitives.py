"""Drawing primitives shared by the MetaPost and matplotlib back ends.

Coordinates are in sphere radii. Gray levels are whiteness values: 0.0 is
black, 1.0 is white.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from poincare_tools.trajectory import LabelPosition

Point2 = tuple[float, float]
ArrowDirection = Literal['forward', 'reverse']


@dataclass(frozen=True)
class FilledPolygon:
    """Closed polygon filled with one gray level (shading cells)."""

    points: tuple[Point2, ...]
    gray: float


@dataclass(frozen=True)
class StrokedPath:
    """Open path stroked with a round pen.

    smooth selects curved joins instead of straight segments. arrow puts an
    arrowhead at the end ('forward') or the start ('reverse') of the path.
    """

    points: tuple[Point2, ...]
    thickness: float
    gray: float = 0.0
    dashed: bool = False
    smooth: bool = False
    arrow: ArrowDirection | None = None
    head_angle: float | None = None


@dataclass(frozen=True)
class TextLabel:
    """Typeset text placed next to an anchor point."""

    text: str
    anchor: Point2
    position: LabelPosition


@dataclass(frozen=True)
class Comment:
    """Section comment in the emitted file; ignored by graphical back ends."""

    text: str


@dataclass(frozen=True)
class Include:
    """External source file read in by the emitted file (passed through unread)."""

    path: str


Primitive = Union[FilledPolygon, StrokedPath, TextLabel, Comment, Include]


@dataclass
class DrawingModel:
    """Ordered primitives of one figure plus figure-level settings."""

    radius_mm: float
    primitives: list[Primitive] = field(default_factory=list)

    def add(self, primitive: Primitive) -> None:
        """Append one primitive."""
        self.primitives.append(primitive)

    def extend(self, primitives: list[Primitive]) -> None:
        """Append several primitives in order."""
        self.primitives.extend(primitives)

    def comment(self, text: str) -> None:
        """Append a section comment."""
        self.primitives.append(Comment(text))

    def count(self, kind: type) -> int:
        """Number of primitives of the given class."""
        return sum(1 for p in self.primitives if isinstance(p, kind))
