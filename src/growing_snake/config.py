"""Game and tick-loop configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from growing_snake.engine import SCORE_INCREMENT
from growing_snake.state import DEFAULT_GRID_SIZE

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 150


@dataclass(frozen=True)
class GameConfig:
    """Settings for one game session.

    Supports JSON serialization so a seeded run can be replayed.
    """

    grid_size: int = DEFAULT_GRID_SIZE
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    score_increment: int = SCORE_INCREMENT
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive.")
        if self.score_increment < 0:
            raise ValueError("score_increment must be >= 0.")

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    def with_overrides(self, **changes) -> GameConfig:
        """Return a copy with every non-``None`` value in *changes* applied."""
        updates = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **updates) if updates else self

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
