"""Growing Snake: deterministic game core on a wrap-around grid."""

from growing_snake.controls import (
    Command,
    apply_command,
    restart,
    set_direction,
    set_paused,
    toggle_pause,
)
from growing_snake.engine import GameLogic, step
from growing_snake.errors import InvalidState, NoFreeCellWarning
from growing_snake.food import generate_food
from growing_snake.state import Direction, GameState, Point

__all__ = [
    "Command",
    "Direction",
    "GameLogic",
    "GameState",
    "InvalidState",
    "NoFreeCellWarning",
    "Point",
    "apply_command",
    "generate_food",
    "restart",
    "set_direction",
    "set_paused",
    "step",
    "toggle_pause",
]
