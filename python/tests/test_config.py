"""Configuration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from backend.config import DATA_DIR, DEFAULT_SIZE, GameConfig


def test_defaults() -> None:
    config = GameConfig()
    assert config.size == DEFAULT_SIZE == 4
    assert config.data_dir == DATA_DIR
    assert config.scores_path == DATA_DIR / "bestscores.json"
    assert config.tick_interval == 1.0


def test_data_dir_accepts_strings(tmp_path: Path) -> None:
    config = GameConfig(data_dir=str(tmp_path))  # type: ignore[arg-type]
    assert config.scores_path == tmp_path / "bestscores.json"


@pytest.mark.parametrize("kwargs", [{"size": 1}, {"tick_interval_ms": 0}])
def test_rejects_invalid(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
