"""NumPy occupancy helpers for the square toroidal grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from growing_snake.state import Point

if TYPE_CHECKING:
    from collections.abc import Iterable

    from growing_snake.state import Direction


def wrap(point: Point, grid_size: int) -> Point:
    """Wrap coordinates around the grid edges."""
    return Point(point.x % grid_size, point.y % grid_size)


def neighbour(point: Point, direction: Direction, grid_size: int) -> Point:
    """Return the cell one step away in *direction*, wrapping at the edges."""
    dx, dy = direction.value
    return wrap(Point(point.x + dx, point.y + dy), grid_size)


def occupancy(cells: Iterable[Point], grid_size: int) -> np.ndarray:
    """Return a boolean ``(grid_size, grid_size)`` mask indexed ``[y, x]``.

    ``True`` marks an occupied cell.
    """
    mask = np.zeros((grid_size, grid_size), dtype=bool)
    points = np.asarray(list(cells), dtype=np.intp).reshape(-1, 2)
    mask[points[:, 1], points[:, 0]] = True
    return mask


def free_cells(cells: Iterable[Point], grid_size: int) -> list[Point]:
    """Return every cell not in *cells*, ordered row by row."""
    ys, xs = np.nonzero(~occupancy(cells, grid_size))
    return [Point(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True)]
