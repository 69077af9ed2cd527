"""Shared fixtures for the engine tests."""

from __future__ import annotations

import pytest

from backend.models.board import Board
from backend.models.highscore import ScoreResult, compute_score


class FakeRecorder:
    """Score recorder double that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def record_result(self, moves: int, elapsed_seconds: int) -> ScoreResult:
        self.calls.append((moves, elapsed_seconds))
        return ScoreResult(
            is_new_best=True, best_score=compute_score(moves, elapsed_seconds)
        )


@pytest.fixture
def recorder() -> FakeRecorder:
    return FakeRecorder()


@pytest.fixture
def one_move_board() -> Board:
    """4×4 board one slide away from solved (blank at index 14)."""
    return Board.from_flat(4, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 0, 15])
