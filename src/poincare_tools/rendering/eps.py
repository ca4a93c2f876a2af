"""Encapsulated PostScript from the MetaPost source (mpost, tex, dvips) and bounding box scan."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from poincare_tools.config import get_dvips_command, get_mpost_command, get_tex_command
from poincare_tools.constants import MM_PER_PT

logger = logging.getLogger(__name__)

_TIMEOUT = 120


@dataclass(frozen=True)
class BoundingBox:
    """%%BoundingBox of an EPS file in PostScript points."""

    llx: int
    lly: int
    urx: int
    ury: int

    @property
    def width_pt(self) -> int:
        return self.urx - self.llx

    @property
    def height_pt(self) -> int:
        return self.ury - self.lly

    @property
    def width_mm(self) -> float:
        return self.width_pt * MM_PER_PT

    @property
    def height_mm(self) -> float:
        return self.height_pt * MM_PER_PT

    def describe(self) -> str:
        """One-line size report."""
        return (
            f'{self.width_mm:.2f} mm x {self.height_mm:.2f} mm'
            f' ({self.width_pt} pt x {self.height_pt} pt)'
        )


def parse_bounding_box(lines: list[str] | tuple[str, ...]) -> BoundingBox:
    """Return the first %%BoundingBox found in the given lines.

    Raises:
        ValueError: If no valid %%BoundingBox line is present.
    """
    for line in lines:
        if not line.startswith('%%BoundingBox:'):
            continue
        fields = line[len('%%BoundingBox:') :].split()
        if len(fields) < 4 or fields[0] == '(atend)':
            continue
        try:
            llx, lly, urx, ury = (int(float(f)) for f in fields[:4])
        except ValueError:
            continue
        return BoundingBox(llx, lly, urx, ury)
    raise ValueError('No %%BoundingBox found')


def scan_bounding_box(path: str | Path) -> BoundingBox:
    """Read the bounding box of an EPS file.

    Raises:
        ValueError: If the file has no %%BoundingBox line.
        OSError: If the file cannot be read.
    """
    with open(path, encoding='latin-1') as f:
        try:
            return parse_bounding_box(f.read().splitlines())
        except ValueError:
            raise ValueError(f'No %%BoundingBox found in {path}') from None


def _run(cmd: list[str], cwd: Path) -> bool:
    """Run one external command; log and return False on failure."""
    logger.debug('Executing system command: %s', ' '.join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error('Failed executing %s: %s', ' '.join(cmd), e)
        return False
    if result.returncode != 0:
        logger.error('Failed executing %s (exit status %d)', ' '.join(cmd), result.returncode)
        if result.stdout:
            logger.debug('%s', result.stdout)
        return False
    return True


def tex_wrapper(job_name: str) -> str:
    """Plain TeX source that boxes the MetaPost figure JOB.1 on a page of its own."""
    return '\\input epsf\\nopagenumbers\\centerline{\\epsfbox{' + job_name + '.1}}\\bye'


def generate_eps(mp_file: str | Path, job_name: str) -> BoundingBox | None:
    """Compile MetaPost source to JOB.eps and return its bounding box.

    Runs mpost, tex and dvips in the directory of the MetaPost file. Failures
    of the external commands are logged as errors and do not raise.

    Parameters:
        mp_file: MetaPost source file.
        job_name: Base name of the intermediate and output files.

    Returns:
        Bounding box of JOB.eps, or None if any step failed.
    """
    mp_path = Path(mp_file)
    workdir = mp_path.parent if str(mp_path.parent) else Path('.')
    steps = [
        [get_mpost_command(), '-job-name', job_name, mp_path.name],
        [get_tex_command(), '-job-name', job_name, tex_wrapper(job_name)],
        [get_dvips_command(), '-D1200', '-E', f'{job_name}.dvi', '-o', f'{job_name}.eps'],
    ]
    for cmd in steps:
        if not _run(cmd, workdir):
            return None
    eps_path = workdir / f'{job_name}.eps'
    try:
        box = scan_bounding_box(eps_path)
    except (OSError, ValueError) as e:
        logger.error('Could not read bounding box of %s: %s', eps_path, e)
        return None
    logger.info('Bounding box of %s: %s', eps_path, box.describe())
    return box
