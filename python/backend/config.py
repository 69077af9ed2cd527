"""Runtime configuration shared by every frontend."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent  # python/
PROJECT_ROOT = ROOT.parent  # sliding-puzzle/
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_SIZE = 4


@dataclass
class GameConfig:
    """Grid dimension, score storage location and clock rate."""

    size: int = DEFAULT_SIZE
    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    scores_filename: str = "bestscores.json"
    tick_interval_ms: int = 1000

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Grid size must be at least 2, got {self.size}.")
        if self.tick_interval_ms <= 0:
            raise ValueError(
                f"Tick interval must be positive, got {self.tick_interval_ms}."
            )
        self.data_dir = Path(self.data_dir)

    @property
    def scores_path(self) -> Path:
        return self.data_dir / self.scores_filename

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000
