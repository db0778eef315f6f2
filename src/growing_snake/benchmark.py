"""Headless games driven by random input, and throughput measurement."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from growing_snake.config import GameConfig
from growing_snake.controls import Command, apply_command
from growing_snake.engine import GameLogic
from growing_snake.state import GameState

logger = logging.getLogger(__name__)

TURNS: tuple[Command, ...] = (
    Command.UP, Command.DOWN, Command.LEFT, Command.RIGHT,
)


def random_turn(
    rng: np.random.Generator, turn_probability: float = 0.2,
) -> Command | None:
    """Return a random turn command with probability *turn_probability*."""
    if rng.random() >= turn_probability:
        return None
    return TURNS[int(rng.integers(len(TURNS)))]


def play_game(
    config: GameConfig,
    *,
    max_ticks: int = 1_000,
    turn_probability: float = 0.2,
    rng: np.random.Generator | None = None,
) -> tuple[GameState, int]:
    """Play one game without a clock, feeding random turns between ticks.

    Returns the final snapshot and the number of ticks played. The game
    stops at game over or after *max_ticks*.
    """
    rng = rng if rng is not None else np.random.default_rng(config.seed)
    logic = GameLogic(score_increment=config.score_increment, rng=rng)
    state = logic.initial(config.grid_size)
    ticks = 0
    while not state.game_over and ticks < max_ticks:
        command = random_turn(rng, turn_probability)
        if command is not None:
            state = apply_command(state, command)
        state = logic.step(state)
        ticks += 1
    return state, ticks


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    total_score: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks "
            f"in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s, "
            f"mean score {self.total_score / max(self.total_games, 1):.1f}"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    grid_size: int = 20,
    max_ticks: int = 1_000,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw transition throughput with random input."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    config = GameConfig(grid_size=grid_size)
    rng = np.random.default_rng(seed)

    total_ticks = 0
    total_score = 0
    start = time.perf_counter()
    for _ in range(num_games):
        state, ticks = play_game(config, max_ticks=max_ticks, rng=rng)
        total_ticks += ticks
        total_score += state.score

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        total_score=total_score,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
