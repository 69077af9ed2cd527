"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random

from backend.engine.gamesolver import Solver
from backend.models.board import Board

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates solvable puzzles by shuffling the solved state."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        tiles = list(range(1, size * size)) + [0]
        return Board(size=size, tiles=tiles, blank_index=size * size - 1)

    @staticmethod
    def scramble(board: Board, rng: random.Random) -> None:
        """Permute *board* in-place with an unbiased Fisher–Yates shuffle.

        The result may be unsolvable; ``generate`` filters those out.
        """
        tiles = board.tiles
        for i in range(len(tiles) - 1, 0, -1):
            j = rng.randint(0, i)
            tiles[i], tiles[j] = tiles[j], tiles[i]
        board.blank_index = tiles.index(0)

    @staticmethod
    def generate(size: int, rng: random.Random | None = None) -> Board:
        """Return a random *solvable*, not-yet-solved board of the given size."""
        rng = rng or random.Random()
        attempts = 0
        while True:
            attempts += 1
            board = GameGenerator.solved(size)
            GameGenerator.scramble(board, rng)
            if Solver.is_solvable(board) and not board.is_solved():
                break
            logger.debug("Rejected shuffle candidate %s", board.tiles)

        logger.debug("Generated %sx%s board after %d attempt(s)", size, size, attempts)
        return board
