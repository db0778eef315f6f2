"""Immutable game snapshot: grid points, headings, and the game state."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from numbers import Integral
from typing import TYPE_CHECKING, NamedTuple

from growing_snake.errors import InvalidState

if TYPE_CHECKING:
    import numpy as np

MIN_GRID_SIZE = 6
DEFAULT_GRID_SIZE = 20


class Point(NamedTuple):
    """A grid cell; ``x`` is the column and ``y`` the row (growing downward)."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the heading pointing the other way."""
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class GameState:
    """One instant of the game.

    The snake is stored head-first: ``snake[0]`` is the head and
    ``snake[-1]`` the tail. Every construction, including
    :func:`dataclasses.replace`, re-checks the invariants and raises
    :class:`InvalidState` on the first one that fails.
    """

    snake: tuple[Point, ...]
    food: Point
    direction: Direction
    grid_size: int = DEFAULT_GRID_SIZE
    game_over: bool = False
    score: int = 0
    paused: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "snake", tuple(_as_point(seg, "Snake segment") for seg in self.snake),
        )
        object.__setattr__(self, "food", _as_point(self.food, "Food"))

        if self.grid_size < MIN_GRID_SIZE:
            raise InvalidState(
                f"Grid size must be at least {MIN_GRID_SIZE}, got {self.grid_size}.",
            )
        if not self.snake:
            raise InvalidState("Snake must have at least one segment.")
        for seg in self.snake:
            if not self.contains(seg):
                raise InvalidState(f"Snake segment {seg} lies outside the grid.")
        if not self.contains(self.food):
            raise InvalidState(f"Food {self.food} lies outside the grid.")
        if self.score < 0:
            raise InvalidState(f"Score must be non-negative, got {self.score}.")

    @property
    def head(self) -> Point:
        return self.snake[0]

    def contains(self, point: Point) -> bool:
        """Check whether a point lies on the grid."""
        return 0 <= point.x < self.grid_size and 0 <= point.y < self.grid_size

    @classmethod
    def initial(
        cls,
        grid_size: int = DEFAULT_GRID_SIZE,
        rng: np.random.Generator | None = None,
    ) -> GameState:
        """Build the starting snapshot.

        A three-segment snake sits at the grid centre, heading up, with its
        body extending downward. Food is placed on a random free cell.
        """
        from growing_snake.food import generate_food

        if grid_size < MIN_GRID_SIZE:
            raise InvalidState(
                f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}.",
            )
        center = grid_size // 2
        placeholder = cls(
            snake=_column(center, center, 3),
            food=Point(0, 0),
            direction=Direction.UP,
            grid_size=grid_size,
        )
        return placeholder.replace(food=generate_food(placeholder, rng=rng))

    def replace(self, **changes) -> GameState:
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize the snapshot to a JSON-friendly dictionary."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food),
            "direction": self.direction.name,
            "grid_size": self.grid_size,
            "score": self.score,
            "game_over": self.game_over,
            "paused": self.paused,
        }


def _as_point(value, what: str) -> Point:
    """Normalise an (x, y) pair to a :class:`Point` of plain ints."""
    try:
        x, y = value
    except (TypeError, ValueError):
        raise InvalidState(f"{what} {value!r} is not an (x, y) pair.") from None
    if not (isinstance(x, Integral) and isinstance(y, Integral)):
        raise InvalidState(f"{what} {value!r} must have integer coordinates.")
    return Point(int(x), int(y))


def _column(x: int, top: int, length: int) -> tuple[Point, ...]:
    return tuple(Point(x, top + i) for i in range(length))
