"""Line-wrapped path expression buffer for MetaPost output."""

from __future__ import annotations

from typing import TextIO

from poincare_tools.constants import NUM_COORDS_PER_METAPOST_LINE


class PathRecord:
    """Path buffer: append coordinate pairs joined by '--' or '..', then write wrapped lines."""

    def __init__(
        self,
        smooth: bool = False,
        per_line: int = NUM_COORDS_PER_METAPOST_LINE,
        digits: int = 4,
    ) -> None:
        """Create an empty path with straight (or smooth) joins."""
        self._join = '..' if smooth else '--'
        self._per_line = max(1, per_line)
        self._fmt = f'({{:.{digits}f}},{{:.{digits}f}})'
        self._lines: list[list[str]] = []
        self._count = 0

    def init(self) -> None:
        """Clear the path."""
        self._lines = []
        self._count = 0

    def append(self, x: float, y: float) -> None:
        """Append one point; starts a new line after every per_line points."""
        if self._count % self._per_line == 0:
            self._lines.append([])
        part = self._fmt.format(x, y)
        if self._count > 0:
            part = self._join + part
        self._lines[-1].append(part)
        self._count += 1

    def __len__(self) -> int:
        return self._count

    def get_lines(self) -> list[str]:
        """Return the path text, one string per output line."""
        return [''.join(parts) for parts in self._lines]

    def write(self, stream: TextIO, name: str = 'p', indent: str = '   ') -> None:
        """Write 'name := <path>;' and re-initialize."""
        lines = self.get_lines()
        if not lines:
            self.init()
            return
        stream.write(f'{indent}{name} := {lines[0]}')
        for line in lines[1:]:
            stream.write(f'\n{indent} {line}')
        stream.write(';\n')
        self.init()
