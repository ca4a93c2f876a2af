"""Split a classified trajectory into runs of constant visibility.

A run is a maximal stretch of consecutive samples with the same visibility
flag. Visible runs are widened by one sample at each end (when that sample
exists) so they overlap the neighbouring hidden strokes; hidden runs keep
their exact limits. Indices are 0-based and ranges inclusive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class RunKind(Enum):
    """Visibility class of a run."""

    HIDDEN = 'hidden'
    VISIBLE = 'visible'


@dataclass(frozen=True)
class Run:
    """One maximal run.

    Attributes:
        kind: Visibility class.
        start: First sample of the run (core range).
        stop: Last sample of the run (core range, inclusive).
        draw_start: First sample of the drawn sub-path.
        draw_stop: Last sample of the drawn sub-path (inclusive).
        arrow: True if the sub-path is the last one of the trajectory and
            should carry an arrowhead.
    """

    kind: RunKind
    start: int
    stop: int
    draw_start: int
    draw_stop: int
    arrow: bool = False

    @property
    def drawable(self) -> bool:
        """True if the drawn sub-path has at least two samples."""
        return self.draw_stop > self.draw_start

    @property
    def indices(self) -> range:
        """Sample indices of the drawn sub-path."""
        return range(self.draw_start, self.draw_stop + 1)


def find_runs(visible: list[bool], *, draw_as_arrow: bool = False) -> list[Run]:
    """Partition the visibility flags into runs in increasing index order.

    Parameters:
        visible: Per-sample visibility flags.
        draw_as_arrow: Mark the run whose drawn range reaches the last sample
            as an arrow.

    Returns:
        Runs covering every index exactly once by their core ranges.
    """
    n = len(visible)
    runs: list[Run] = []
    k = 0
    while k < n:
        cls = visible[k]
        start = k
        while k + 1 < n and visible[k + 1] == cls:
            k += 1
        stop = k
        if cls:
            draw_start = start - 1 if start > 0 else start
            draw_stop = stop + 1 if stop < n - 1 else stop
            kind = RunKind.VISIBLE
        else:
            draw_start, draw_stop = start, stop
            kind = RunKind.HIDDEN
        runs.append(
            Run(
                kind=kind,
                start=start,
                stop=stop,
                draw_start=draw_start,
                draw_stop=draw_stop,
                arrow=draw_as_arrow and draw_stop == n - 1,
            )
        )
        k += 1
    return runs


def subpaths(runs: list[Run], kind: RunKind) -> list[Run]:
    """Return the drawable runs of one class, in increasing index order."""
    out = [r for r in runs if r.kind is kind and r.drawable]
    for r in out:
        logger.debug(
            'Detected %s subpath from index %d to %d', kind.value, r.draw_start, r.draw_stop
        )
    return out
