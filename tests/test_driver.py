"""Tests for the asyncio tick driver."""

from __future__ import annotations

import asyncio

import pytest

from growing_snake.config import GameConfig
from growing_snake.controls import Command
from growing_snake.driver import GameDriver
from growing_snake.state import Direction, GameState

_FAST = GameConfig(grid_size=20, tick_interval_ms=10, seed=0)


def _doomed_state() -> GameState:
    """A snake that hits itself on its first move."""
    return GameState(
        snake=[(5, 5), (5, 6), (5, 7)],
        food=(0, 0),
        direction=Direction.DOWN,
        grid_size=10,
    )


class TestDriverInit:
    def test_starts_from_initial_state(self):
        driver = GameDriver(_FAST)
        assert driver.state.snake == ((10, 10), (10, 11), (10, 12))
        assert driver.ticks == 0
        assert not driver.running

    def test_seeded_drivers_agree(self):
        assert GameDriver(_FAST).state == GameDriver(_FAST).state

    def test_threadsafe_submit_requires_start(self):
        driver = GameDriver(_FAST)
        with pytest.raises(RuntimeError, match="not been started"):
            driver.submit_threadsafe(Command.LEFT)


class TestTickLoop:
    @pytest.mark.asyncio
    async def test_ticks_advance(self):
        driver = GameDriver(_FAST)
        driver.start()
        await asyncio.sleep(0.1)
        await driver.stop()
        assert driver.ticks >= 1
        assert driver.state.head != (10, 10)

    @pytest.mark.asyncio
    async def test_start_twice_rejected(self):
        driver = GameDriver(_FAST)
        driver.start()
        with pytest.raises(RuntimeError, match="already started"):
            driver.start()
        await driver.stop()

    @pytest.mark.asyncio
    async def test_stop_is_immediate(self):
        driver = GameDriver(_FAST)
        driver.start()
        await asyncio.sleep(0.05)
        await driver.stop()
        ticks = driver.ticks
        state = driver.state
        await asyncio.sleep(0.05)
        assert driver.ticks == ticks
        assert driver.state is state
        assert not driver.running

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self):
        driver = GameDriver(_FAST)
        driver.start()
        await driver.stop()
        await driver.stop()
        assert not driver.running

    @pytest.mark.asyncio
    async def test_game_over_suppresses_ticks(self):
        driver = GameDriver(_FAST, state=_doomed_state())
        driver.start()
        await asyncio.sleep(0.1)
        assert driver.state.game_over
        assert driver.ticks == 1
        assert driver.running
        await driver.stop()

    @pytest.mark.asyncio
    async def test_restart_resumes_ticking(self):
        driver = GameDriver(_FAST, state=_doomed_state())
        driver.start()
        await asyncio.sleep(0.05)
        assert driver.state.game_over
        fresh = await driver.submit(Command.RESTART)
        assert not fresh.game_over
        assert fresh.grid_size == 10
        await asyncio.sleep(0.1)
        assert driver.ticks > 1
        await driver.stop()


class TestCommands:
    @pytest.mark.asyncio
    async def test_turn(self):
        driver = GameDriver(_FAST)
        state = await driver.submit(Command.LEFT)
        assert state.direction is Direction.LEFT
        assert driver.state is state

    @pytest.mark.asyncio
    async def test_reversal_ignored(self):
        driver = GameDriver(_FAST)
        before = driver.state
        assert await driver.submit(Command.DOWN) is before

    @pytest.mark.asyncio
    async def test_pause_suppresses_ticks_without_backlog(self):
        driver = GameDriver(_FAST)
        driver.start()
        await asyncio.sleep(0.05)
        await driver.submit(Command.PAUSE)
        assert driver.state.paused
        paused_ticks = driver.ticks
        await asyncio.sleep(0.1)
        assert driver.ticks == paused_ticks

        await driver.submit(Command.PAUSE)
        assert not driver.state.paused
        # Nothing missed during the pause is replayed on resume.
        assert driver.ticks == paused_ticks
        await asyncio.sleep(0.1)
        assert driver.ticks > paused_ticks
        await driver.stop()

    @pytest.mark.asyncio
    async def test_two_turns_before_a_tick_cannot_reverse(self):
        driver = GameDriver(GameConfig(tick_interval_ms=10_000, seed=0))
        await driver.submit(Command.LEFT)
        state = await driver.submit(Command.DOWN)
        assert state.direction is Direction.LEFT
        assert not driver.logic.step(state).game_over

    @pytest.mark.asyncio
    async def test_resume_waits_a_full_interval(self):
        driver = GameDriver(GameConfig(tick_interval_ms=300, seed=0))
        loop = asyncio.get_running_loop()
        driver.start()
        await asyncio.sleep(0.1)
        await driver.submit(Command.PAUSE)
        await driver.submit(Command.PAUSE)
        resumed_at = loop.time()
        assert driver.ticks == 0
        while driver.ticks == 0:
            await asyncio.sleep(0.005)
        assert loop.time() - resumed_at >= 0.28
        await driver.stop()

    @pytest.mark.asyncio
    async def test_exit_stops_driver(self):
        driver = GameDriver(_FAST)
        driver.start()
        await driver.submit(Command.EXIT)
        assert not driver.running

    @pytest.mark.asyncio
    async def test_commands_ignored_after_stop(self):
        driver = GameDriver(_FAST)
        driver.start()
        await driver.stop()
        before = driver.state
        assert await driver.submit(Command.LEFT) is before

    @pytest.mark.asyncio
    async def test_request_schedules_submit(self):
        driver = GameDriver(_FAST)
        task = driver.request(Command.RIGHT)
        await task
        assert driver.state.direction is Direction.RIGHT

    @pytest.mark.asyncio
    async def test_submit_from_another_thread(self):
        driver = GameDriver(_FAST)
        driver.start()

        def press_left() -> GameState:
            return driver.submit_threadsafe(Command.LEFT).result(timeout=2)

        state = await asyncio.to_thread(press_left)
        assert state.direction is Direction.LEFT
        await driver.stop()


class TestListeners:
    @pytest.mark.asyncio
    async def test_listener_sees_each_snapshot(self):
        driver = GameDriver(_FAST)
        seen: list[GameState] = []
        driver.subscribe(seen.append)
        driver.start()
        await asyncio.sleep(0.1)
        await driver.stop()
        assert len(seen) == driver.ticks
        assert seen[-1] is driver.state

    @pytest.mark.asyncio
    async def test_listener_can_exit(self):
        driver = GameDriver(_FAST)

        def on_state(state: GameState) -> None:
            if driver.ticks >= 3:
                driver.request(Command.EXIT)

        driver.subscribe(on_state)
        driver.start()
        await asyncio.wait_for(driver.wait_stopped(), timeout=2)
        assert not driver.running
        assert driver.ticks >= 3

    @pytest.mark.asyncio
    async def test_listener_error_ends_loop(self, caplog):
        driver = GameDriver(_FAST)

        def broken(state: GameState) -> None:
            raise RuntimeError("render failed")

        driver.subscribe(broken)
        driver.start()
        await asyncio.wait_for(driver.wait_stopped(), timeout=2)
        assert not driver.running
        assert driver.ticks == 1
        assert "Tick loop error" in caplog.text
