"""Tests for the configuration dataclasses."""

import json

import pytest

from neon_snake.config import (
    DEFAULT_GEMINI_MODEL,
    CommentaryConfig,
    GameConfig,
)


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.initial_speed == 150
        assert cfg.min_speed == 60
        assert cfg.speed_decrement == 2
        assert cfg.initial_length == 3
        assert cfg.seed is None

    def test_initial_body(self):
        assert GameConfig().initial_body() == [(10, 10), (10, 11), (10, 12)]

    def test_initial_body_small_grid(self):
        cfg = GameConfig(grid_size=5, initial_length=2)
        assert cfg.initial_body() == [(2, 2), (2, 3)]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"grid_size": 3},
            {"min_speed": 0},
            {"initial_speed": 50, "min_speed": 60},
            {"speed_decrement": -1},
            {"initial_length": 0},
            {"grid_size": 4, "initial_length": 3},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    def test_speed_level(self):
        cfg = GameConfig()
        assert cfg.speed_level(150) == 5
        assert cfg.speed_level(148) == 6
        assert cfg.speed_level(60) == 50
        assert cfg.speed_level(1000) == 1

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=12, initial_speed=120, seed=9)
        path = tmp_path / "sub" / "game.json"
        cfg.save(path)
        assert json.loads(path.read_text())["grid_size"] == 12
        assert GameConfig.load(path) == cfg


class TestCommentaryConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "  'abc123'  ")
        monkeypatch.delenv("NEON_SNAKE_GEMINI_MODEL", raising=False)
        cfg = CommentaryConfig.from_env()
        assert cfg.api_key == "abc123"
        assert cfg.model == DEFAULT_GEMINI_MODEL

    def test_gemini_key_fallback(self, monkeypatch):
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "gk")
        monkeypatch.setenv("NEON_SNAKE_GEMINI_MODEL", "gemini-test")
        cfg = CommentaryConfig.from_env()
        assert cfg.api_key == "gk"
        assert cfg.model == "gemini-test"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert CommentaryConfig.from_env().api_key is None
