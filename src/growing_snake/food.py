"""Food placement."""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np

from growing_snake.errors import NoFreeCellWarning
from growing_snake.grid import free_cells
from growing_snake.state import Point

if TYPE_CHECKING:
    from growing_snake.state import GameState

logger = logging.getLogger(__name__)

FALLBACK_FOOD = Point(0, 0)


def generate_food(
    state: GameState,
    rng: np.random.Generator | None = None,
) -> Point:
    """Pick a cell for the food uniformly among cells the snake leaves free.

    When the snake covers the whole grid there is nowhere to put the food:
    a :class:`NoFreeCellWarning` is emitted and :data:`FALLBACK_FOOD` is
    returned instead of raising.
    """
    rng = rng if rng is not None else np.random.default_rng()
    empty = free_cells(state.snake, state.grid_size)
    if not empty:
        logger.warning(
            "No free cell for food on a %dx%d grid; using %s.",
            state.grid_size, state.grid_size, FALLBACK_FOOD,
        )
        warnings.warn(
            f"Snake fills all {state.grid_size ** 2} cells; "
            f"food falls back to {FALLBACK_FOOD}.",
            NoFreeCellWarning,
            stacklevel=2,
        )
        return FALLBACK_FOOD
    return empty[int(rng.integers(len(empty)))]
