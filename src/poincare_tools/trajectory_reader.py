"""Reader for Stokes trajectory files.

Grammar (tokens separated by blanks or commas; '%' starts a comment that runs
to the end of the line)::

    record      := 'p' [beginlabel] triplet+ 'q' [endlabel]
    triplet     := s1 s2 s3 ['t'] [ticklabel]
    beginlabel  := 'b' pos "text"
    endlabel    := 'e' pos "text"
    ticklabel   := 'l' pos "text"

Anything else left on the line of a triplet is treated as commentary. Label
text is enclosed in double quotes and must close on the same line.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import NamedTuple, TextIO

from poincare_tools.errors import CapacityExceededError, MalformedInputError
from poincare_tools.params import Capacity
from poincare_tools.trajectory import Label, LabelKind, Point3, Trajectory, parse_label_position

logger = logging.getLogger(__name__)

_SEPARATORS = ' \t\r\n\f\v,'


class Token(NamedTuple):
    """One input token with its 1-based line number."""

    text: str
    line: int
    quoted: bool = False


def tokenize(lines: Iterable[str]) -> Iterator[Token]:
    """Split input lines into tokens, dropping comments and separators.

    Raises:
        MalformedInputError: On a quoted string that does not close on its line.
    """
    for line_num, line in enumerate(lines, start=1):
        i = 0
        n = len(line)
        while i < n:
            ch = line[i]
            if ch in _SEPARATORS:
                i += 1
            elif ch == '%':
                break
            elif ch == '"':
                end = line.find('"', i + 1)
                if end < 0:
                    raise MalformedInputError(
                        'Reached end of line without closing quote mark', line_num
                    )
                yield Token(line[i + 1 : end], line_num, quoted=True)
                i = end + 1
            else:
                j = i
                while j < n and line[j] not in _SEPARATORS and line[j] not in '%"':
                    j += 1
                yield Token(line[i:j], line_num)
                i = j


def _is_keyword(tok: Token | None, word: str) -> bool:
    return tok is not None and not tok.quoted and tok.text == word


class _Parser:
    """Recursive-descent parser over the token stream."""

    def __init__(self, tokens: Iterable[Token], capacity: Capacity) -> None:
        self._tokens = list(tokens)
        self._pos = 0
        self._cap = capacity

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self, what: str, line: int) -> Token:
        tok = self._peek()
        if tok is None:
            raise MalformedInputError(f'Unexpected end of file, expected {what}', line)
        self._pos += 1
        return tok

    def parse(self) -> list[Trajectory]:
        out: list[Trajectory] = []
        while (tok := self._peek()) is not None:
            if not _is_keyword(tok, 'p'):
                raise MalformedInputError(f"Expected 'p' to start a trajectory, found {tok.text!r}", tok.line)
            self._pos += 1
            logger.debug('New trajectory detected at line %d', tok.line)
            out.append(self._record(tok.line))
        return out

    def _label(self, kind: LabelKind, index: int, line: int) -> Label:
        pos_tok = self._next('label position', line)
        position = parse_label_position(pos_tok.text, pos_tok.line)
        text_tok = self._next('quoted label text', pos_tok.line)
        if not text_tok.quoted:
            raise MalformedInputError(
                f'Use enclosing quote marks (") around label text, found {text_tok.text!r}',
                text_tok.line,
            )
        if len(text_tok.text) > self._cap.max_label_length:
            raise CapacityExceededError('label characters', self._cap.max_label_length)
        logger.debug('Parsed %s label %r at line %d', kind.value, text_tok.text, text_tok.line)
        return Label(index=index, position=position, text=text_tok.text, kind=kind)

    def _number(self, name: str, line: int) -> float:
        tok = self._next(name, line)
        try:
            value = float(tok.text)
        except ValueError:
            raise MalformedInputError(f'Faulty {name} {tok.text!r}', tok.line) from None
        if tok.quoted or not math.isfinite(value):
            raise MalformedInputError(f'Faulty {name} {tok.text!r}', tok.line)
        return value

    def _record(self, start_line: int) -> Trajectory:
        traj = Trajectory(first_line=start_line)
        line = start_line
        if _is_keyword(self._peek(), 'b'):
            begin_tok = self._next('b', line)
            logger.debug('Begin-point label detected at line %d', begin_tok.line)
            traj.begin_label = self._label(LabelKind.BEGIN, 0, begin_tok.line)

        while True:
            tok = self._peek()
            if tok is None:
                raise MalformedInputError(
                    f"Missing 'q' terminator for trajectory started at line {start_line}", line
                )
            if _is_keyword(tok, 'q'):
                self._pos += 1
                line = tok.line
                break
            self._triplet(traj)
            line = self._tokens[self._pos - 1].line

        if not traj.points:
            raise MalformedInputError('Trajectory has no Stokes triplets', start_line)
        logger.debug('End of Stokes trajectory detected at line %d', line)

        if _is_keyword(self._peek(), 'e'):
            end_tok = self._next('e', line)
            traj.end_label = self._label(LabelKind.END, len(traj.points) - 1, end_tok.line)
        return traj

    def _triplet(self, traj: Trajectory) -> None:
        first = self._tokens[self._pos]
        s1 = self._number('S1', first.line)
        s2 = self._number('S2', first.line)
        s3 = self._number('S3', first.line)
        traj.points.append(Point3(s1, s2, s3))
        if len(traj.points) > self._cap.max_samples:
            raise CapacityExceededError('Stokes triplets in trajectory', self._cap.max_samples)
        index = len(traj.points) - 1
        line = self._tokens[self._pos - 1].line

        if _is_keyword(self._peek(), 't'):
            self._pos += 1
            traj.tick_indices.append(index)
            if len(traj.tick_indices) > self._cap.max_ticks:
                raise CapacityExceededError('tick marks', self._cap.max_ticks)
        if _is_keyword(self._peek(), 'l'):
            l_tok = self._next('l', line)
            traj.tick_labels.append(self._label(LabelKind.TICK, index, l_tok.line))
            if len(traj.tick_labels) > self._cap.max_labels:
                raise CapacityExceededError('labels', self._cap.max_labels)
            line = self._tokens[self._pos - 1].line

        # A 'q' right after the triplet and its t/l fields ends the record; any
        # other trailing text on the line, including a later 'q', is commentary.
        tok = self._peek()
        if tok is not None and tok.line == line and _is_keyword(tok, 'q'):
            return
        while (tok := self._peek()) is not None and tok.line == line:
            logger.debug('Ignoring %r after triplet at line %d', tok.text, tok.line)
            self._pos += 1


def read_trajectories(
    source: TextIO | Iterable[str],
    capacity: Capacity | None = None,
) -> list[Trajectory]:
    """Parse every trajectory record from a text stream or iterable of lines.

    Parameters:
        source: Open text stream or lines.
        capacity: Limits on samples, ticks, labels and label length.

    Returns:
        Trajectories in file order.

    Raises:
        MalformedInputError: On any grammar violation (line number in message).
        CapacityExceededError: If a limit is exceeded.
    """
    parser = _Parser(tokenize(source), capacity or Capacity())
    trajectories = parser.parse()
    logger.debug('Read %d trajectories', len(trajectories))
    return trajectories


def read_trajectory_file(path: str, capacity: Capacity | None = None) -> list[Trajectory]:
    """Parse a trajectory file by name."""
    with open(path, encoding='utf-8') as f:
        return read_trajectories(f, capacity)
