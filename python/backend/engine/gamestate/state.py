"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.board import Board
from backend.models.highscore import ScoreResult


class Phase(StrEnum):
    READY = "ready"
    PLAYING = "playing"
    SOLVED = "solved"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a game handed to observers."""

    board: tuple[int, ...]
    moves: int
    elapsed_seconds: int
    phase: Phase
    result: ScoreResult | None = None


class GameState:
    """Holds the current board, move counter, elapsed time and phase."""

    def __init__(self, board: Board, phase: Phase = Phase.READY) -> None:
        self.board = board
        self.phase = phase
        self.moves: int = 0
        self.elapsed_seconds: int = 0
        self.result: ScoreResult | None = None

    # -- time tracking --------------------------------------------------------

    def tick(self) -> bool:
        """Advance the clock one second; only a game in play keeps time."""
        if self.phase is not Phase.PLAYING:
            return False
        self.elapsed_seconds += 1
        return True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.as_tuple(),
            moves=self.moves,
            elapsed_seconds=self.elapsed_seconds,
            phase=self.phase,
            result=self.result,
        )
