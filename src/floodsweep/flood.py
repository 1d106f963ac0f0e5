"""
Flood fill over terrain grids.

Breadth-first propagation across orthogonal neighbours, stopping at
solid tiles. The fill can run to completion or be consumed lazily one
filled tile at a time, e.g. to redraw the grid after every step.
"""
import logging
from collections import deque
from typing import Deque, Iterator

from .errors import OutOfBoundsError, SolidTileError
from .grid import ORTHOGONAL_OFFSETS, Grid, Position
from .tiles import Tile


logger = logging.getLogger(__name__)


def iter_flood_fill(
    grid: Grid[Tile], marker: str, x: int, y: int
) -> Iterator[Position]:
    """
    Flood fill grid from (x, y), yielding each tile as it is filled.

    The start position is validated immediately; the fill itself runs
    as the returned iterator is consumed.

    Args:
        grid: Terrain grid, mutated in place.
        marker: Fill marker written into every reached tile.
        x: Start column.
        y: Start row.

    Returns:
        Iterator over newly filled positions, start first.

    Raises:
        OutOfBoundsError: If the start is outside the grid.
        SolidTileError: If the start tile is solid.
    """
    if not grid.in_bounds(x, y):
        raise OutOfBoundsError(x, y, grid.width, grid.height)
    if grid.get(x, y).is_solid:
        raise SolidTileError(f"Cannot start a fill on solid tile ({x}, {y})")
    return _fill(grid, Tile.filled(marker), x, y)


def _fill(grid: Grid[Tile], fill: Tile, x: int, y: int) -> Iterator[Position]:
    # Holding the fill tile doubles as the visited test.
    queue: Deque[Position] = deque()
    filled = 0
    if grid.get(x, y) != fill:
        grid.set(x, y, fill)
        filled += 1
        yield x, y
    queue.append((x, y))

    while queue:
        cx, cy = queue.popleft()
        for nx, ny in grid.neighbors(cx, cy, ORTHOGONAL_OFFSETS):
            tile = grid.get(nx, ny)
            if tile == fill or tile.is_solid:
                continue
            grid.set(nx, ny, fill)
            queue.append((nx, ny))
            filled += 1
            yield nx, ny

    logger.debug("Filled %d tiles with %r from (%d, %d)", filled, fill.marker, x, y)


def flood_fill(grid: Grid[Tile], marker: str, x: int, y: int) -> Grid[Tile]:
    """
    Fill the 4-connected region of non-solid tiles around (x, y).

    Args:
        grid: Terrain grid, mutated in place.
        marker: Fill marker.
        x: Start column.
        y: Start row.

    Returns:
        The same grid, for chaining.
    """
    for _ in iter_flood_fill(grid, marker, x, y):
        pass
    return grid
