"""Tests for game configuration."""

import json

import pytest

from growing_snake.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.tick_interval_ms == 150
        assert cfg.score_increment == 10
        assert cfg.seed is None
        assert cfg.tick_interval == pytest.approx(0.15)

    def test_frozen(self):
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.grid_size = 10  # type: ignore[misc]

    @pytest.mark.parametrize("interval", [0, -5])
    def test_rejects_bad_interval(self, interval):
        with pytest.raises(ValueError, match="tick_interval_ms"):
            GameConfig(tick_interval_ms=interval)

    def test_rejects_negative_increment(self):
        with pytest.raises(ValueError, match="score_increment"):
            GameConfig(score_increment=-1)

    def test_with_overrides_skips_none(self):
        cfg = GameConfig(seed=3)
        updated = cfg.with_overrides(grid_size=12, seed=None)
        assert updated.grid_size == 12
        assert updated.seed == 3

    def test_with_no_overrides_returns_self(self):
        cfg = GameConfig()
        assert cfg.with_overrides(seed=None) is cfg

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=12, tick_interval_ms=80, seed=9)
        path = tmp_path / "sub" / "config.json"
        cfg.save(path)
        assert path.exists()
        assert GameConfig.load(path) == cfg

    def test_saved_json(self, tmp_path):
        path = tmp_path / "config.json"
        GameConfig().save(path)
        raw = json.loads(path.read_text())
        assert raw == {
            "grid_size": 20,
            "tick_interval_ms": 150,
            "score_increment": 10,
            "seed": None,
        }
