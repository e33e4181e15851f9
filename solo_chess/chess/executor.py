"""
Executing a move on a board: the only place where pieces actually change squares.

The input board is never touched: every execution works on a copy and returns it together with the record of the move.
Appending that record to the history is up to the caller.

Test executions (`is_test=True`) are the hypothetical moves used to check legality / score the opponent's options:
they don't mark pieces as moved. Nothing here checks if the move is legal, see `solo_chess.chess.rules.apply_move`.
"""

import logging
from typing import Optional, Protocol

from solo_chess.chess.board import Board
from solo_chess.chess.castling import CastlingSide, castling_rook_positions, castling_side
from solo_chess.chess.history import MoveRecord
from solo_chess.chess.moves import is_pawn_push_to_promotion_square
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position
from solo_chess.core.exceptions import IllegalMoveError
from solo_chess.core.shared_types import PieceType

logger = logging.getLogger(__name__)


class PromotionPolicy(Protocol):
    """Decides what a pawn turns into when a side does not get asked (the automated player)."""

    def choose(
        self, board: Board, from_position: Position, to_position: Position
    ) -> PieceType: ...


class AlwaysQueen:
    """The automated player always promotes into a queen."""

    def choose(
        self, board: Board, from_position: Position, to_position: Position
    ) -> PieceType:
        return PieceType.QUEEN


def execute_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    promotion: Optional[PieceType] = None,
    is_test: bool = False,
) -> tuple[Board, MoveRecord]:
    """
    Apply a move on a copy of the board
    ----

    1. Remember the captured piece (if any) before it gets overwritten
    2. King shifting two columns? --> castling: the rook jumps over to the other side of the king
    3. Pawn moving diagonally onto an empty square? --> en passant: remove the pawn that was passed
    4. Move the piece, clear the origin (and mark it as moved, unless this is a test execution)
    5. Pawn on its last rank + a piece type to promote into? --> swap the pawn for that piece
    """
    new_board = board.copy()
    piece = new_board.piece(from_position)
    if piece is None:
        raise IllegalMoveError(f"There is no piece on {from_position} to move.")

    before_move = piece.copy()
    captured = new_board.piece(to_position)
    promotes = is_pawn_push_to_promotion_square(from_position, to_position, new_board)

    # castling move must displace two pieces on the board, but just add one record
    castling: Optional[CastlingSide] = None
    if piece.type == PieceType.KING:
        castling = castling_side(from_position, to_position)
        if castling is not None:
            _move_castling_rook(new_board, from_position.row, castling, is_test)

    en_passant = False
    if (
        piece.type == PieceType.PAWN
        and from_position.col != to_position.col
        and captured is None
    ):
        # The pawn taken stands next to where the moving pawn started, in the column it moves into
        captured = new_board.remove_piece(Position(from_position.row, to_position.col))
        en_passant = True

    new_board.remove_piece(from_position)
    new_board.place_piece(piece, to_position)
    if not is_test:
        piece.has_moved = True

    applied_promotion = promotion if promotes else None
    if applied_promotion is not None:
        piece.promote_to(applied_promotion)

    record = MoveRecord(
        piece=before_move,
        from_position=from_position,
        to_position=to_position,
        captured=captured,
        promotion=applied_promotion,
        castling=castling,
        en_passant=en_passant,
    )
    if not is_test:
        logger.debug("executed %s", record.to_notation())
    return new_board, record


def simulate_move(board: Board, from_position: Position, to_position: Position) -> Board:
    """Test execution: the board after the move, without marking anything as moved."""
    new_board, _ = execute_move(board, from_position, to_position, is_test=True)
    return new_board


def _move_castling_rook(
    board: Board, row: int, side: CastlingSide, is_test: bool
) -> None:
    """Move the rook from its corner next to the king's destination"""
    rook_from, rook_to = castling_rook_positions(row, side)
    rook: Optional[Piece] = board.remove_piece(rook_from)
    if rook is None:
        return
    board.place_piece(rook, rook_to)
    if not is_test:
        rook.has_moved = True
