"""Error taxonomy for trajectory parsing, capacity limits and geometry."""

from __future__ import annotations


class PoincareError(Exception):
    """Base class for all errors raised while building a Poincare map."""


class MalformedInputError(PoincareError, ValueError):
    """Grammar violation in a trajectory file or an invalid label position code."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f'line {line}: {message}'
        super().__init__(message)


class CapacityExceededError(PoincareError, RuntimeError):
    """Sample, tick, label, arrow or shading-cell count exceeds its configured limit."""

    def __init__(self, what: str, limit: int) -> None:
        self.what = what
        self.limit = limit
        super().__init__(f'Number of {what} exceeds limit of {limit}')


class NumericalDegeneracyError(PoincareError, ArithmeticError):
    """Zero-length vector in tangent/normal construction or a non-finite coordinate.

    The offending trajectory sample index (0-based) is kept in ``index``.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f'{message} (sample {index})'
        super().__init__(message)


class DegenerateInputError(PoincareError, ValueError):
    """Zero-magnitude point where a direction on the sphere is required.

    When raised for a trajectory sample, ``index`` is the 0-based sample and
    ``line`` the input line where its trajectory starts.
    """

    def __init__(self, message: str, index: int | None = None, line: int | None = None) -> None:
        self.index = index
        self.line = line
        if index is not None and line is not None:
            message = f'{message} (sample {index} of trajectory at line {line})'
        elif index is not None:
            message = f'{message} (sample {index})'
        super().__init__(message)
