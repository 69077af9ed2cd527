from backend.models.board import Board, Direction
from backend.models.highscore import (
    BestScoreEntry,
    BestScoreManager,
    ScoreRecorder,
    ScoreResult,
    compute_score,
)

__all__ = [
    "BestScoreEntry",
    "BestScoreManager",
    "Board",
    "Direction",
    "ScoreRecorder",
    "ScoreResult",
    "compute_score",
]
