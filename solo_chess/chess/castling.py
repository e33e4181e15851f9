"""Castling squares. Needs to be imported by multiple sources (move generation, the executor, and the move records)"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from solo_chess.chess.position import Position
from solo_chess.core.shared_types import Color


class CastlingSide(StrEnum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the columns where king/rook start from/end up in by castling.
    Castling never leaves the back rank, so the row is given by the color.
    """

    king_from: int
    king_to: int
    rook_from: int
    rook_to: int

    def king_path(self) -> list[int]:
        """Columns the king passes through or lands on (excluding where it stands now)"""
        step = 1 if self.king_to > self.king_from else -1
        return list(range(self.king_from + step, self.king_to + step, step))

    def squares_between(self) -> list[int]:
        """Columns strictly between king and rook. Must all be empty to castle."""
        low, high = sorted((self.king_from, self.rook_from))
        return list(range(low + 1, high))


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingSide, CastlingSquares] = {
    CastlingSide.KINGSIDE: CastlingSquares(king_from=4, king_to=6, rook_from=7, rook_to=5),
    CastlingSide.QUEENSIDE: CastlingSquares(king_from=4, king_to=2, rook_from=0, rook_to=3),
}

BACK_RANK: dict[Color, int] = {
    Color.WHITE: 7,
    Color.BLACK: 0,
}


def castling_side(from_position: Position, to_position: Position) -> Optional[CastlingSide]:
    """A king shifting two columns along its rank is castling. Anything else is not."""
    if from_position.row != to_position.row:
        return None
    col_shift = to_position.col - from_position.col
    if col_shift == 2:
        return CastlingSide.KINGSIDE
    if col_shift == -2:
        return CastlingSide.QUEENSIDE
    return None


def castling_rook_positions(row: int, side: CastlingSide) -> tuple[Position, Position]:
    """Where the rook castling with a king on the given row starts from / ends up in"""
    rule = CASTLING_RULES[side]
    return Position(row, rule.rook_from), Position(row, rule.rook_to)
