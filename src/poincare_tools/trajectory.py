"""Stokes trajectory data model: points, label placements, tick marks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from poincare_tools.errors import MalformedInputError


class Point3(NamedTuple):
    """Stokes triplet (s1, s2, s3)."""

    s1: float
    s2: float
    s3: float


class LabelPosition(Enum):
    """Compass placement of a label relative to its anchor point.

    Values are the MetaPost label suffixes.
    """

    TOP = 'top'
    BOTTOM = 'bot'
    LEFT = 'lft'
    RIGHT = 'rt'
    UPPER_LEFT = 'ulft'
    UPPER_RIGHT = 'urt'
    LOWER_LEFT = 'llft'
    LOWER_RIGHT = 'lrt'


# Input spellings -> placement. rgt, lrgt and urgt are the older long forms.
_POSITION_CODES: dict[str, LabelPosition] = {
    'top': LabelPosition.TOP,
    'bot': LabelPosition.BOTTOM,
    'lft': LabelPosition.LEFT,
    'rt': LabelPosition.RIGHT,
    'rgt': LabelPosition.RIGHT,
    'ulft': LabelPosition.UPPER_LEFT,
    'urt': LabelPosition.UPPER_RIGHT,
    'urgt': LabelPosition.UPPER_RIGHT,
    'llft': LabelPosition.LOWER_LEFT,
    'lrt': LabelPosition.LOWER_RIGHT,
    'lrgt': LabelPosition.LOWER_RIGHT,
}


def parse_label_position(code: str, line: int | None = None) -> LabelPosition:
    """Return the LabelPosition for a placement code (top, bot, lft, rt, ulft, urt, llft, lrt).

    Parameters:
        code: Placement code as written in the input.
        line: Input line number for the error message, if known.

    Returns:
        Matching LabelPosition.

    Raises:
        MalformedInputError: If the code is not a known placement.
    """
    try:
        return _POSITION_CODES[code]
    except KeyError:
        raise MalformedInputError(f'Invalid label position {code!r}', line) from None


class LabelKind(Enum):
    """Which slot a trajectory label occupies."""

    BEGIN = 'begin'
    TICK = 'tick'
    END = 'end'


@dataclass(frozen=True)
class Label:
    """Text label anchored at a trajectory sample (0-based index)."""

    index: int
    position: LabelPosition
    text: str
    kind: LabelKind = LabelKind.TICK


@dataclass
class Trajectory:
    """One parsed trajectory block (from 'p' to its matching 'q').

    Begin and end labels are kept apart from tick labels so the two can never
    overwrite each other.
    """

    points: list[Point3] = field(default_factory=list)
    tick_indices: list[int] = field(default_factory=list)
    tick_labels: list[Label] = field(default_factory=list)
    begin_label: Label | None = None
    end_label: Label | None = None
    first_line: int = 0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def labels(self) -> list[Label]:
        """All labels in emission order: begin, tick labels, end."""
        out: list[Label] = []
        if self.begin_label is not None:
            out.append(self.begin_label)
        out.extend(self.tick_labels)
        if self.end_label is not None:
            out.append(self.end_label)
        return out
