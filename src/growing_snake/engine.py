"""Per-tick transition function: movement, collision, food, and scoring."""

from __future__ import annotations

import logging

import numpy as np

from growing_snake.food import generate_food
from growing_snake.grid import neighbour
from growing_snake.state import GameState

logger = logging.getLogger(__name__)

SCORE_INCREMENT = 10


def step(
    state: GameState,
    rng: np.random.Generator | None = None,
    score_increment: int = SCORE_INCREMENT,
) -> GameState:
    """Advance *state* by one tick and return the next snapshot.

    Paused and finished games come back unchanged (the same object). The
    only side effect is drawing from *rng* when eaten food has to respawn.
    Direction and pause flags pass through untouched; the driver owns them.
    """
    if state.game_over or state.paused:
        return state

    new_head = neighbour(state.head, state.direction, state.grid_size)
    ate_food = new_head == state.food

    # The tail moves out of the way this tick unless the snake is growing.
    blockers = state.snake[1:] if ate_food else state.snake[1:-1]
    game_over = new_head in blockers

    if ate_food:
        snake = (new_head, *state.snake)
    else:
        snake = (new_head, *state.snake[:-1])

    food = state.food
    score = state.score
    if ate_food:
        score += score_increment
        # Respawn against the grown body so food never lands on the snake.
        food = generate_food(state.replace(snake=snake), rng=rng)
        logger.debug("Food eaten at %s; score %d, next food %s.", new_head, score, food)

    if game_over:
        logger.info(
            "Snake hit itself at %s with length %d and score %d.",
            new_head, len(snake), score,
        )

    return state.replace(snake=snake, food=food, game_over=game_over, score=score)


class GameLogic:
    """Transition engine bound to one random generator.

    Holding the generator here keeps food placement reproducible for a
    given *seed* across a whole game.
    """

    def __init__(
        self,
        score_increment: int = SCORE_INCREMENT,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if score_increment < 0:
            raise ValueError("score_increment must be >= 0.")
        self.score_increment = score_increment
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def initial(self, grid_size: int) -> GameState:
        """Build a starting snapshot using this engine's generator."""
        return GameState.initial(grid_size, rng=self.rng)

    def step(self, state: GameState) -> GameState:
        return step(state, rng=self.rng, score_increment=self.score_increment)
