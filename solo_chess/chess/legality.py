"""
Legal moves: the pseudo-moves of a piece, minus the ones that would put (or leave) your own king in check.

This is the only place "possible moves" get exposed to the rest of the application. Pseudo-moves never leave this module.
"""

from typing import Sequence

from solo_chess.chess.attacks import is_king_in_check
from solo_chess.chess.board import Board
from solo_chess.chess.castling import BACK_RANK, CASTLING_RULES, CastlingSquares
from solo_chess.chess.executor import simulate_move
from solo_chess.chess.history import MoveRecord
from solo_chess.chess.moves import MOVEMENT_RULES
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position
from solo_chess.core.shared_types import Color, PieceType

MoveCandidate = tuple[Position, Position]


def pseudo_moves(
    board: Board, position: Position, history: Sequence[MoveRecord]
) -> list[Position]:
    """
    Candidate destinations for the piece on `position`
    ----

    1. generate candidate moves, using the basic movement rules for the piece type
    2. king? add the castling moves that are currently allowed
    """
    piece = board.piece(position)
    if piece is None:
        return []

    movement_rule = MOVEMENT_RULES[piece.type]
    targets = movement_rule(position, board, history, False)
    if piece.type == PieceType.KING:
        targets.extend(castling_destinations(board, position))
    return targets


def legal_moves(
    board: Board, position: Position, history: Sequence[MoveRecord]
) -> set[Position]:
    """Destinations the piece on `position` may legally move to. Empty square --> empty set."""
    return set(_legal_targets(board, position, history))


def all_legal_moves(
    board: Board, color: Color, history: Sequence[MoveRecord]
) -> list[MoveCandidate]:
    """Every legal (from, to) pair for `color`, in board order (a8 ... h1)"""
    return [
        (from_position, to_position)
        for from_position in board.locate_color(color)
        for to_position in _legal_targets(board, from_position, history)
    ]


def has_legal_moves(board: Board, color: Color, history: Sequence[MoveRecord]) -> bool:
    """Stops at the first piece that can move."""
    return any(
        _legal_targets(board, position, history)
        for position in board.locate_color(color)
    )


def _legal_targets(
    board: Board, position: Position, history: Sequence[MoveRecord]
) -> list[Position]:
    piece = board.piece(position)
    if piece is None:
        return []

    targets: list[Position] = []
    for target in pseudo_moves(board, position, history):
        if target in targets:
            continue
        if not _is_putting_yourself_in_check(board, position, target, piece.color):
            targets.append(target)
    return targets


def _is_putting_yourself_in_check(
    board: Board, from_position: Position, to_position: Position, color: Color
) -> bool:
    """Return True if the move leaves your own king attacked. Tested on a scratch copy of the board."""
    board_after = simulate_move(board, from_position, to_position)
    return is_king_in_check(board_after, color)


# -- CASTLING RULE HELPERS ---
def castling_destinations(board: Board, king_position: Position) -> list[Position]:
    """
    Where the king on `king_position` could castle to
    ---

    **you are allowed to castle if**

    * Neither the king nor the rook of choice have moved before (and that rook is still there).
    * You are not currently in check (you cannot castle out of check).
    * All squares in between the king and the rook are empty.
    * The king does not pass through, or land on, a square that is under attack.

    Any condition failing just means no castling move for that side. It is never an error.
    """
    king = board.piece(king_position)
    if king is None or king.type != PieceType.KING or king.has_moved:
        return []

    if king_position.row != BACK_RANK[king.color]:
        return []

    # Cannot castle out of a check.
    if is_king_in_check(board, king.color):
        return []

    destinations: list[Position] = []
    for rule in CASTLING_RULES.values():
        if king_position.col != rule.king_from:
            continue

        if not _has_unmoved_rook(board, king, king_position.row, rule):
            continue

        # Cannot castle if any of the squares in between is occupied
        row = king_position.row
        if any(not board.is_empty(Position(row, col)) for col in rule.squares_between()):
            continue

        # Cannot castle through (or into) check
        if any(
            _is_king_attacked_on(board, king, king_position, Position(row, col))
            for col in rule.king_path()
        ):
            continue

        destinations.append(Position(row, rule.king_to))
    return destinations


def _has_unmoved_rook(board: Board, king: Piece, row: int, rule: CastlingSquares) -> bool:
    rook = board.piece(Position(row, rule.rook_from))
    return (
        rook is not None
        and rook.type == PieceType.ROOK
        and rook.color == king.color
        and not rook.has_moved
    )


def _is_king_attacked_on(
    board: Board, king: Piece, king_position: Position, test_position: Position
) -> bool:
    """Test-place the king on another square (nothing else moves) and check if it is attacked there."""
    test_board = board.copy()
    test_board.remove_piece(king_position)
    test_board.place_piece(king.copy(), test_position)
    return is_king_in_check(test_board, king.color)
