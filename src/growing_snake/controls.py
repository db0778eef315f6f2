"""Driver-side state operations and input commands.

The engine never judges a turn; the input side does. Every function here
returns a new snapshot (or the same one when the request is ignored) and
never mutates its argument.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from growing_snake.grid import neighbour
from growing_snake.state import DEFAULT_GRID_SIZE, Direction, GameState

if TYPE_CHECKING:
    import numpy as np

logger = logging.getLogger(__name__)


class Command(enum.Enum):
    """Requests an input collaborator can send to the game."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    RESTART = "restart"
    EXIT = "exit"

    @property
    def direction(self) -> Direction | None:
        """The heading this command asks for, if it is a turn."""
        return _TURNS.get(self)


_TURNS: dict[Command, Direction] = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


def is_reversal(current: Direction, requested: Direction) -> bool:
    """Check whether *requested* would turn straight back into the neck."""
    return requested is current.opposite


def turns_into_neck(state: GameState, direction: Direction) -> bool:
    """Check whether moving in *direction* would put the head on ``snake[1]``.

    Several turns can be accepted before the next tick, so comparing with
    the pending heading alone is not enough.
    """
    if len(state.snake) < 2:
        return False
    return neighbour(state.head, direction, state.grid_size) == state.snake[1]


def set_direction(state: GameState, direction: Direction) -> GameState:
    """Change heading, ignoring 180° reversals and finished games."""
    if state.game_over or direction is state.direction:
        return state
    if is_reversal(state.direction, direction) or turns_into_neck(state, direction):
        logger.debug(
            "Ignoring reversal from %s to %s.",
            state.direction.name, direction.name,
        )
        return state
    return state.replace(direction=direction)


def set_paused(state: GameState, paused: bool) -> GameState:
    if state.game_over or state.paused == paused:
        return state
    return state.replace(paused=paused)


def toggle_pause(state: GameState) -> GameState:
    return set_paused(state, not state.paused)


def restart(
    grid_size: int = DEFAULT_GRID_SIZE,
    rng: np.random.Generator | None = None,
) -> GameState:
    """Start over with a fresh initial snapshot."""
    return GameState.initial(grid_size, rng=rng)


def apply_command(
    state: GameState,
    command: Command,
    rng: np.random.Generator | None = None,
) -> GameState:
    """Translate one input command into a state operation.

    ``RESTART`` only applies once the game is over, so a stray key press
    cannot throw away a running game. ``EXIT`` is handled by whoever runs
    the tick loop and leaves the state alone.
    """
    if command.direction is not None:
        return set_direction(state, command.direction)
    if command is Command.PAUSE:
        return toggle_pause(state)
    if command is Command.RESTART:
        if not state.game_over:
            return state
        logger.info("Restarting after game over with score %d.", state.score)
        return restart(state.grid_size, rng=rng)
    return state
