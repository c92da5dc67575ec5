# gridpath/core/maze.py
#!/usr/bin/env python3
"""
Procedural maze layouts: a solid border, broken concentric rings and spiral
arms around the centre, and a lattice of forced-open cells every 6 rows and
columns that keeps the layout from sealing itself off.
"""

import logging
import math
import random
from typing import List, Optional

from gridpath.core.errors import InvalidDimensions
from gridpath.core.types import Cell, CellKind, Grid

logger = logging.getLogger(__name__)

RING_SPACING = 8
RING_WIDTH = 0.8
RING_DENSITY = 0.7
SPIRAL_SECTOR = math.pi / 6
SPIRAL_WIDTH = 0.2
SPIRAL_DENSITY = 0.6
CLEAR_RADIUS = 5
LATTICE_STEP = 6


def lattice_cells(rows: int, cols: int) -> List[Cell]:
    """Cells the lattice forces open: (x, y) with x, y = 1 mod 6 plus their down/right neighbour."""
    out: List[Cell] = []
    for x in range(1, rows - 1, LATTICE_STEP):
        for y in range(1, cols - 1, LATTICE_STEP):
            out.append((x, y))
            if x + 1 < rows - 1:
                out.append((x + 1, y))
            if y + 1 < cols - 1:
                out.append((x, y + 1))
    return out


def _is_border(rows: int, cols: int, x: int, y: int) -> bool:
    return x == 0 or x == rows - 1 or y == 0 or y == cols - 1


def generate_maze(rows: int, cols: int, seed: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> Grid:
    grid = Grid.create(rows, cols)
    if rng is None:
        rng = random.Random(seed)
    cx, cy = rows / 2, cols / 2

    for x in range(rows):
        for y in range(cols):
            if _is_border(rows, cols, x, y):
                grid.cells[x][y] = CellKind.WALL
                continue

            d = math.hypot(x - cx, y - cy)
            if d <= CLEAR_RADIUS:
                continue

            # concentric rings
            if d % RING_SPACING < RING_WIDTH and rng.random() < RING_DENSITY:
                grid.cells[x][y] = CellKind.WALL
                continue

            # spiral arms; fmod keeps the sign of the angle like a truncating modulo
            theta = math.atan2(y - cy, x - cx)
            if abs(math.fmod(theta + d / 3, SPIRAL_SECTOR)) < SPIRAL_WIDTH and rng.random() < SPIRAL_DENSITY:
                grid.cells[x][y] = CellKind.WALL

    for x, y in lattice_cells(rows, cols):
        grid.cells[x][y] = CellKind.FREE

    logger.debug("generated %dx%d maze (seed=%s): %d walls", rows, cols, seed, grid.count(CellKind.WALL))
    return grid


def place_endpoints(grid: Grid) -> Grid:
    """Put start on the first lattice cell and end on the last one."""
    cells = lattice_cells(grid.rows, grid.cols)
    if len(cells) < 2:
        raise InvalidDimensions(f"{grid.rows}x{grid.cols} interior has room for only one endpoint")
    grid.clear_endpoints()
    grid.set_start(cells[0])
    grid.set_end(cells[-1])
    return grid
