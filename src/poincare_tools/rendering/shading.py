"""Phong-style shading of the projected sphere disk.

The disk (radius 1 in sphere units) is cut into rho_steps rings and
phi_steps sectors. Each cell is filled with one gray level computed from the
outward normal at the cell's mid radius and mid angle.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poincare_tools.errors import CapacityExceededError

if TYPE_CHECKING:
    import numpy as np

    from poincare_tools.params import ViewState

logger = logging.getLogger(__name__)


def shade(rho: float, phi: float, view: ViewState) -> float:
    """Whiteness of the sphere at disk radius rho (sphere radii) and angle phi (radians).

    With n the outward normal (rho cos phi, rho sin phi, sqrt(1 - rho^2)) and
    l the light direction, the result is lower if n.l < 0, otherwise
    lower + (upper - lower) * (n.l)^2.
    """
    nz = math.sqrt(max(0.0, 1.0 - rho * rho))
    lx, ly, lz = view.light_direction
    prod = rho * math.cos(phi) * lx + rho * math.sin(phi) * ly + nz * lz
    c1 = view.lower_whiteness
    if prod < 0.0:
        return c1
    return c1 + (view.upper_whiteness - c1) * prod * prod


@dataclass(frozen=True)
class ShadingCell:
    """One filled quadrilateral: four corners (sphere radii) and its whiteness."""

    corners: tuple[tuple[float, float], ...]
    whiteness: float


def shade_grid(view: ViewState, rho_steps: int, phi_steps: int) -> np.ndarray:
    """Whiteness of every cell as an array of shape (rho_steps, phi_steps)."""
    import numpy as np

    d_rho = 1.0 / rho_steps
    d_phi = 2.0 * math.pi / phi_steps
    rho_mid = (np.arange(rho_steps, dtype=np.float64) + 0.5) * d_rho
    phi_mid = (np.arange(phi_steps, dtype=np.float64) + 0.5) * d_phi
    rr, pp = np.meshgrid(rho_mid, phi_mid, indexing='ij')
    lx, ly, lz = view.light_direction
    nz = np.sqrt(np.clip(1.0 - rr * rr, 0.0, None))
    prod = rr * np.cos(pp) * lx + rr * np.sin(pp) * ly + nz * lz
    c1 = view.lower_whiteness
    c2 = view.upper_whiteness - c1
    return np.where(prod < 0.0, c1, c1 + c2 * prod * prod)


def shading_cells(
    view: ViewState,
    rho_steps: int,
    phi_steps: int,
    max_cells: int | None = None,
) -> list[ShadingCell]:
    """Build the filled cells covering the sphere disk.

    Parameters:
        view: Supplies the light direction and whiteness bounds.
        rho_steps: Number of rings.
        phi_steps: Number of sectors.
        max_cells: Upper limit on rho_steps * phi_steps, or None.

    Returns:
        Cells ordered ring by ring from the center, sector by sector
        counterclockwise from three o'clock.

    Raises:
        ValueError: If either step count is below 1.
        CapacityExceededError: If the grid has more than max_cells cells.
    """
    import numpy as np

    if rho_steps < 1 or phi_steps < 1:
        raise ValueError(f'Shading grid needs at least one cell, got {rho_steps}x{phi_steps}')
    if max_cells is not None and rho_steps * phi_steps > max_cells:
        raise CapacityExceededError('shading cells', max_cells)
    values = shade_grid(view, rho_steps, phi_steps)
    rho_edges = np.linspace(0.0, 1.0, rho_steps + 1)
    phi_edges = np.linspace(0.0, 2.0 * math.pi, phi_steps + 1)
    cos_e = np.cos(phi_edges)
    sin_e = np.sin(phi_edges)

    cells: list[ShadingCell] = []
    for i in range(rho_steps):
        r0 = float(rho_edges[i])
        r1 = float(rho_edges[i + 1])
        for j in range(phi_steps):
            c0, s0 = float(cos_e[j]), float(sin_e[j])
            c1, s1 = float(cos_e[j + 1]), float(sin_e[j + 1])
            corners = (
                (r0 * c0, r0 * s0),
                (r1 * c0, r1 * s0),
                (r1 * c1, r1 * s1),
                (r0 * c1, r0 * s1),
            )
            cells.append(ShadingCell(corners=corners, whiteness=float(values[i, j])))
    logger.debug('Shading grid: %d x %d cells', rho_steps, phi_steps)
    return cells
