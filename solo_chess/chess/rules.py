"""
The rules engine as seen from the outside (the game session / a UI).

Everything here is a function of (board, history). Boards are never modified in place and the history is never appended to:
`apply_move` hands back the new board + the record of the move, and the caller keeps its own history.
"""

from typing import Optional, Sequence

from solo_chess.chess.board import Board
from solo_chess.chess.executor import execute_move
from solo_chess.chess.history import MoveRecord, captured_pieces
from solo_chess.chess.legality import legal_moves
from solo_chess.chess.moves import is_pawn_push_to_promotion_square
from solo_chess.chess.opponent import OpponentMove, opponent_move
from solo_chess.chess.pieces import PROMOTION_OPTIONS
from solo_chess.chess.position import Position
from solo_chess.chess.status import is_check, is_checkmate, is_stalemate
from solo_chess.core.exceptions import IllegalMoveError, PromotionRequiredError
from solo_chess.core.shared_types import PieceType

__all__ = [
    "OpponentMove",
    "apply_move",
    "captured_pieces",
    "is_check",
    "is_checkmate",
    "is_stalemate",
    "legal_moves",
    "new_game",
    "opponent_move",
]


def new_game() -> Board:
    """The standard starting position."""
    return Board.starting_position()


def apply_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    history: Sequence[MoveRecord],
    promotion: Optional[PieceType] = None,
    is_test: bool = False,
) -> tuple[Board, MoveRecord]:
    """
    Play a move
    ----

    Real moves (`is_test=False`) get validated first:
    1. the destination must be one of `legal_moves()` for that piece
    2. a pawn reaching its last rank needs a piece type to promote into (and only then)

    Test moves skip the validation and leave every `has_moved` flag as it was.
    Either way the input board and history stay untouched. Append the returned record yourself.
    """
    if not is_test:
        _validate_move(board, from_position, to_position, history, promotion)
    return execute_move(board, from_position, to_position, promotion, is_test)


def _validate_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    history: Sequence[MoveRecord],
    promotion: Optional[PieceType],
) -> None:
    if board.piece(from_position) is None:
        raise IllegalMoveError(f"There is no piece on {from_position} to move.")

    if to_position not in legal_moves(board, from_position, history):
        raise IllegalMoveError(f"Move not allowed: {from_position}{to_position}")

    promotes = is_pawn_push_to_promotion_square(from_position, to_position, board)
    if promotes and promotion is None:
        raise PromotionRequiredError(
            f"Pawn reaches the last rank on {to_position}: pick one of {', '.join(PROMOTION_OPTIONS)}"
        )
    if promotion is not None and not promotes:
        raise IllegalMoveError(
            f"Only a pawn reaching the last rank can promote (move {from_position}{to_position})."
        )
    if promotion is not None and promotion not in PROMOTION_OPTIONS:
        raise IllegalMoveError(f"Cannot promote into a {promotion}.")
