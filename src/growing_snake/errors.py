"""Exceptions and warnings raised by the game core."""

from __future__ import annotations


class InvalidState(ValueError):
    """A :class:`~growing_snake.state.GameState` violated one of its invariants."""


class NoFreeCellWarning(UserWarning):
    """Food could not be placed because the snake fills the whole grid."""
