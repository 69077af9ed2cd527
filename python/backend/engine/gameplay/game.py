"""Core gameplay logic — processes moves, keeps time and checks the win."""

from __future__ import annotations

import logging
import random
from typing import Callable

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState, Phase, Snapshot
from backend.models.board import Board, Direction
from backend.models.highscore import BestScoreManager, ScoreRecorder

logger = logging.getLogger(__name__)

Observer = Callable[[Snapshot], None]

# The offset points to the tile that will slide into the blank.
# UP   → tile at (br+1, bc) moves up    → blank shifts down
# DOWN → tile at (br-1, bc) moves down  → blank shifts up
# LEFT → tile at (br, bc+1) moves left  → blank shifts right
# RIGHT→ tile at (br, bc-1) moves right → blank shifts left
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class GamePlay:
    """Orchestrates a single game session.

    A session starts ``READY`` on a solved board. ``new_game`` shuffles and
    starts play; the session becomes ``SOLVED`` on the move that solves the
    board, at which point the score recorder is told exactly once. Invalid
    input of any kind is ignored rather than raised.
    """

    def __init__(
        self,
        size: int = 4,
        *,
        rng: random.Random | None = None,
        recorder: ScoreRecorder | None = None,
    ) -> None:
        self.size = size
        self._rng = rng or random.Random()
        self._recorder: ScoreRecorder = recorder or BestScoreManager(size=size)
        self._observers: list[Observer] = []
        self.initialize()

    @classmethod
    def from_board(
        cls,
        board: Board,
        *,
        recorder: ScoreRecorder | None = None,
    ) -> "GamePlay":
        """Start a game in play on an existing board (e.g. a fixture)."""
        obj = cls(board.size, recorder=recorder)
        obj.state = GameState(board.copy(), phase=Phase.PLAYING)
        return obj

    # -- observers ------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call *observer* with a snapshot after every state change.

        Returns a function that removes the subscription.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _emit(self) -> None:
        snap = self.state.snapshot()
        for observer in list(self._observers):
            observer(snap)

    # -- lifecycle ------------------------------------------------------------

    def initialize(self) -> None:
        self.state = GameState(GameGenerator.solved(self.size), phase=Phase.READY)
        self._emit()

    def new_game(self) -> None:
        board = GameGenerator.generate(self.size, self._rng)
        self.state = GameState(board, phase=Phase.PLAYING)
        logger.info("New %sx%s game started", self.size, self.size)
        self._emit()

    def tick(self) -> bool:
        if not self.state.tick():
            return False
        self._emit()
        return True

    # -- movement -------------------------------------------------------------

    def attempt_move(self, index: int) -> bool:
        """Slide the tile at *index* into the blank.

        Returns True if the tile was orthogonally adjacent to the blank and
        the move was applied.
        """
        if self.state.phase is not Phase.PLAYING:
            return False
        board = self.state.board
        if not 0 <= index < len(board.tiles):
            return False

        tr, tc = board.row_col(index)
        br, bc = board.row_col(board.blank_index)
        if abs(tr - br) + abs(tc - bc) != 1:
            return False

        self._apply(index)
        return True

    def attempt_directional_move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        if self.state.phase is not Phase.PLAYING:
            return False
        board = self.state.board
        br, bc = board.row_col(board.blank_index)
        offset = _OFFSETS.get(direction)
        if offset is None:
            return False
        tr, tc = br + offset[0], bc + offset[1]

        if not board.contains(tr, tc):
            return False

        self._apply(board.index_of(tr, tc))
        return True

    # -- queries --------------------------------------------------------------

    def is_solved(self) -> bool:
        return self.state.is_solved

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_won(self) -> bool:
        return self.state.phase is Phase.SOLVED

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    # -- helpers --------------------------------------------------------------

    def _apply(self, index: int) -> None:
        self.state.board.slide(index)
        self.state.increment_moves()
        try:
            if self.state.is_solved:
                self._finish()
        finally:
            self._emit()

    def _finish(self) -> None:
        state = self.state
        # Solved stands even if the recorder raises.
        state.phase = Phase.SOLVED
        state.result = self._recorder.record_result(
            state.moves, state.elapsed_seconds
        )
        logger.info(
            "Solved in %d moves, %ds (new best: %s)",
            state.moves, state.elapsed_seconds, state.result.is_new_best,
        )
