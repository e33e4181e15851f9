"""
Move records and the move history.

A record is created exactly once for every move that actually gets played (never for the hypothetical moves
used to test legality or to score the opponent's options). The history is a plain list owned by the caller:
the engine reads it (en passant depends on the last move) but never appends to it.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from solo_chess.chess.castling import CastlingSide
from solo_chess.chess.pieces import PIECE_TO_FEN, Piece
from solo_chess.chess.position import Position
from solo_chess.core.shared_types import Color, PieceType

NOTATION_SYMBOLS: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(frozen=True)
class MoveRecord:
    """Log entry of a move that was played. `piece` is a snapshot of the moving piece before the move."""

    piece: Piece
    from_position: Position
    to_position: Position
    captured: Optional[Piece] = None
    promotion: Optional[PieceType] = None
    castling: Optional[CastlingSide] = None
    en_passant: bool = False

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def is_pawn_double_step(self) -> bool:
        """A pawn that advanced two ranks in one go (the only kind of move that allows en passant right after)"""
        rows_moved = abs(self.from_position.row - self.to_position.row)
        return self.piece.type == PieceType.PAWN and rows_moved == 2

    def to_uci(self) -> str:
        """Universal Chess Interface notation, ex. 'e2e4', 'e7e8q'"""
        piece_char = PIECE_TO_FEN[self.promotion] if self.promotion else ""
        return f"{self.from_position.to_algebraic()}{self.to_position.to_algebraic()}{piece_char}"

    def to_notation(self) -> str:
        """
        Notation shown in the move list: piece letter (none for pawns), origin, destination, promotion.
        ex. 'e2e4', 'Ng1f3', 'e7e8=Q'
        """
        notation = (
            f"{NOTATION_SYMBOLS[self.piece.type]}"
            f"{self.from_position.to_algebraic()}{self.to_position.to_algebraic()}"
        )
        if self.promotion:
            notation += f"={NOTATION_SYMBOLS[self.promotion]}"
        return notation


MoveHistory = list[MoveRecord]


def last_move(history: Sequence[MoveRecord]) -> Optional[MoveRecord]:
    return history[-1] if history else None


def captured_pieces(history: Sequence[MoveRecord]) -> dict[Color, list[Piece]]:
    """The pieces each color has lost so far, in the order they were captured."""
    captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
    for move in history:
        if move.captured is not None:
            captured[move.captured.color].append(move.captured)
    return captured
