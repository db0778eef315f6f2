"""Asyncio tick loop holding the current snapshot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from growing_snake.config import GameConfig
from growing_snake.controls import Command, apply_command
from growing_snake.engine import GameLogic

if TYPE_CHECKING:
    import concurrent.futures

    import numpy as np

    from growing_snake.state import GameState

logger = logging.getLogger(__name__)

Listener = Callable[["GameState"], None]


class GameDriver:
    """Owns the single mutable "current state" slot of one game.

    The tick task and input commands both go through ``_lock``, so a tick
    sees either the old or the new snapshot, never a mix. Ticks only run
    while ``_runnable`` is set, that is while the game is neither paused
    nor over; suppressed ticks are dropped rather than replayed.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        state: GameState | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.logic = GameLogic(
            score_increment=self.config.score_increment,
            rng=rng,
            seed=self.config.seed,
        )
        self.ticks = 0
        self._state = (
            state if state is not None
            else self.logic.initial(self.config.grid_size)
        )
        self._lock = asyncio.Lock()
        self._runnable = asyncio.Event()
        self._listeners: list[Listener] = []
        self._pending: set[asyncio.Task] = set()
        self._task: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stopping = False
        self._pauses = 0
        self._update_runnable()

    @property
    def state(self) -> GameState:
        """The current snapshot."""
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: Listener) -> None:
        """Call *listener* with every new snapshot."""
        self._listeners.append(listener)

    def start(self) -> None:
        """Launch the tick loop on the running event loop."""
        if self._task is not None:
            raise RuntimeError("Driver already started.")
        self._loop = asyncio.get_running_loop()
        self._task = self._loop.create_task(self._tick_loop())
        logger.info(
            "Driver started on a %dx%d grid at %d ms per tick.",
            self.config.grid_size, self.config.grid_size,
            self.config.tick_interval_ms,
        )

    async def stop(self) -> None:
        """Cancel the tick loop. No further step runs once this is called."""
        self._stopping = True
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info(
            "Driver stopped after %d ticks with score %d.",
            self.ticks, self._state.score,
        )

    async def wait_stopped(self) -> None:
        """Wait until the tick loop has ended, without cancelling it."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def submit(self, command: Command) -> GameState:
        """Apply one input command between ticks and return the new state."""
        if command is Command.EXIT:
            await self.stop()
            return self._state
        async with self._lock:
            if not self._stopping:
                self._publish(
                    apply_command(self._state, command, rng=self.logic.rng),
                )
            return self._state

    def request(self, command: Command) -> asyncio.Task:
        """Schedule :meth:`submit` from synchronous code on the loop thread."""
        task = asyncio.get_running_loop().create_task(self.submit(command))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def submit_threadsafe(self, command: Command) -> concurrent.futures.Future:
        """Schedule :meth:`submit` from a thread other than the loop's."""
        if self._loop is None:
            raise RuntimeError("Driver has not been started.")
        return asyncio.run_coroutine_threadsafe(self.submit(command), self._loop)

    async def _tick_loop(self) -> None:
        interval = self.config.tick_interval
        try:
            while not self._stopping:
                await self._runnable.wait()
                pauses = self._pauses
                await asyncio.sleep(interval)
                async with self._lock:
                    # Paused (even if resumed since), finished, or stopped
                    # while we slept: start a full interval over.
                    if (
                        self._stopping
                        or pauses != self._pauses
                        or not self._runnable.is_set()
                    ):
                        continue
                    self.ticks += 1
                    self._publish(self.logic.step(self._state))
                    if self._state.game_over:
                        logger.info(
                            "Game over at tick %d with score %d.",
                            self.ticks, self._state.score,
                        )
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled after %d ticks.", self.ticks)
        except Exception:
            logger.exception("Tick loop error after %d ticks.", self.ticks)

    def _publish(self, state: GameState) -> None:
        if state is self._state:
            return
        self._state = state
        self._update_runnable()
        for listener in list(self._listeners):
            listener(state)

    def _update_runnable(self) -> None:
        if self._state.paused or self._state.game_over:
            self._pauses += 1
            self._runnable.clear()
        else:
            self._runnable.set()
