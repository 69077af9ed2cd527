"""Sliding puzzle solvability checks."""

from __future__ import annotations

from backend.models.board import Board


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def inversions(board: Board) -> int:
        """Count tile pairs that appear in reverse order, ignoring the blank."""
        tiles = [t for t in board.tiles if t != 0]
        count = 0
        for i, a in enumerate(tiles):
            for b in tiles[i + 1 :]:
                if a > b:
                    count += 1
        return count

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state.

        Odd widths: the inversion count must be even. Even widths: the
        blank's row, counted 1-based from the bottom, must be even exactly
        when the inversion count is odd. The goal state (no inversions,
        blank on row 1) satisfies both.
        """
        inv = Solver.inversions(board)
        if board.size % 2 == 1:
            return inv % 2 == 0

        blank_row_from_bottom = board.size - board.blank_index // board.size
        return (blank_row_from_bottom % 2 == 0) == (inv % 2 == 1)
