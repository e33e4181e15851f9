"""
A position (square) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Rows / cols are both 0-based.
BOARD_DIMENSIONS = (8, 8)

Vector = tuple[int, int]


@dataclass(frozen=True)
class Position:
    """
    (row, col) on the board.
    ---

    Row 0 is black's back rank (rank 8), row 7 is white's back rank (rank 1).
    Col 0 is the a-file, col 7 the h-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a8' --> (0, 0), 'h1' --> (7, 7)"""
        col = ord(sq[0].lower()) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1:])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, delta: Vector) -> Position:
        dr, dc = delta
        return Position(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return self.to_algebraic()
