"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    """Derived after every executed move. Never stored apart from the board + move history it was computed from."""

    PLAYING = "playing"
    CHECK = "check"
    WHITE_WIN = "white win"
    BLACK_WIN = "black win"
    STALEMATE = "stalemate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


# The human always plays white, the automated opponent always plays black
HUMAN_COLOR = Color.WHITE
COMPUTER_COLOR = Color.BLACK
