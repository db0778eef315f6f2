"""Command-line entry point for headless Growing Snake runs."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import numpy as np

from growing_snake.config import GameConfig
from growing_snake.controls import Command

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="growing-snake",
        description="Headless Growing Snake simulation and benchmarking.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with random input and print it.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--tick-ms", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=1_000)
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument(
        "--realtime", action="store_true",
        help="Run through the asyncio tick driver at the configured rate.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure transition throughput.",
    )
    bench_p.add_argument("--games", type=int, default=100)
    bench_p.add_argument("--grid-size", type=int, default=20)
    bench_p.add_argument("--max-ticks", type=int, default=1_000)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write the default config to a JSON file.",
    )
    config_p.add_argument("output", help="Destination path.")

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    return config.with_overrides(
        grid_size=args.grid_size,
        seed=args.seed,
        tick_interval_ms=args.tick_ms,
    )


async def _play_realtime(
    config: GameConfig, max_ticks: int, turn_probability: float,
):
    from growing_snake.benchmark import random_turn
    from growing_snake.driver import GameDriver

    rng = np.random.default_rng(config.seed)
    driver = GameDriver(config, rng=rng)

    def on_state(state) -> None:
        if state.game_over or driver.ticks >= max_ticks:
            driver.request(Command.EXIT)
            return
        command = random_turn(rng, turn_probability)
        if command is not None:
            driver.request(command)

    driver.subscribe(on_state)
    driver.start()
    await driver.wait_stopped()
    return driver.state, driver.ticks


def _run_simulate(args: argparse.Namespace) -> int:
    from growing_snake.benchmark import play_game

    parser = _build_parser()
    if args.max_ticks < 1:
        parser.error("--max-ticks must be at least 1.")
    if not 0.0 <= args.turn_probability <= 1.0:
        parser.error("--turn-probability must be between 0 and 1.")
    try:
        config = _load_config(args)
        if args.realtime:
            state, ticks = asyncio.run(
                _play_realtime(config, args.max_ticks, args.turn_probability),
            )
        else:
            state, ticks = play_game(
                config,
                max_ticks=args.max_ticks,
                turn_probability=args.turn_probability,
            )
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Simulation finished after %d ticks.", ticks)
    print(json.dumps({"ticks": ticks, "state": state.to_dict()}))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from growing_snake.benchmark import benchmark_throughput

    parser = _build_parser()
    if args.games < 1:
        parser.error("--games must be at least 1.")
    try:
        result = benchmark_throughput(
            num_games=args.games,
            grid_size=args.grid_size,
            max_ticks=args.max_ticks,
            seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``growing-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
