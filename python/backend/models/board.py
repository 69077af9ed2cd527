"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored as a flat row-major list of ints, so cell ``(r, c)``
    lives at index ``r * size + c``. 0 represents the blank space.
    """

    size: int
    tiles: list[int]
    blank_index: int

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])

        Raises ``ValueError`` unless *flat* is a permutation of
        ``0 .. size*size - 1``.
        """
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}.")
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise ValueError(
                f"Tiles must be a permutation of 0..{size * size - 1}."
            )
        tiles = list(flat)
        return cls(size=size, tiles=tiles, blank_index=tiles.index(0))

    # -- geometry -------------------------------------------------------------

    def row_col(self, index: int) -> tuple[int, int]:
        return divmod(index, self.size)

    def index_of(self, row: int, col: int) -> int:
        return row * self.size + col

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    # -- queries --------------------------------------------------------------

    def get_tile(self, row: int, col: int) -> int:
        return self.tiles[self.index_of(row, col)]

    def rows(self) -> list[list[int]]:
        """Return the tiles as a list of rows, for rendering."""
        n = self.size
        return [self.tiles[r * n : (r + 1) * n] for r in range(n)]

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = len(self.tiles) - 1
        for i in range(last):
            if self.tiles[i] != i + 1:
                return False
        return self.tiles[last] == 0

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its goal position."""
        val = self.get_tile(row, col)
        if val == 0:
            return row == self.size - 1 and col == self.size - 1
        return self.index_of(row, col) == val - 1

    # -- mutation -------------------------------------------------------------

    def slide(self, index: int) -> None:
        """Swap the tile at *index* with the blank. No adjacency check."""
        b = self.blank_index
        self.tiles[b], self.tiles[index] = self.tiles[index], self.tiles[b]
        self.blank_index = index

    def copy(self) -> Board:
        return Board(
            size=self.size,
            tiles=self.tiles[:],
            blank_index=self.blank_index,
        )

    def as_tuple(self) -> tuple[int, ...]:
        return tuple(self.tiles)
