"""Checks for ending the game: check, checkmate, stalemate, and the resulting game status."""

from typing import Sequence

from solo_chess.chess.attacks import is_king_in_check
from solo_chess.chess.board import Board
from solo_chess.chess.history import MoveRecord
from solo_chess.chess.legality import has_legal_moves
from solo_chess.core.shared_types import Color, Status

WIN_STATUS: dict[Color, Status] = {
    Color.WHITE: Status.WHITE_WIN,
    Color.BLACK: Status.BLACK_WIN,
}


def is_check(board: Board, color: Color, history: Sequence[MoveRecord]) -> bool:
    """The king of `color` is attacked. (History is not needed, but keeps the same signature as the other checks)"""
    return is_king_in_check(board, color)


def is_checkmate(board: Board, color: Color, history: Sequence[MoveRecord]) -> bool:
    return is_check(board, color, history) and not has_legal_moves(board, color, history)


def is_stalemate(board: Board, color: Color, history: Sequence[MoveRecord]) -> bool:
    return not is_check(board, color, history) and not has_legal_moves(
        board, color, history
    )


def game_status(
    board: Board, history: Sequence[MoveRecord], color_to_move: Color
) -> Status:
    """
    Status of the game from the point of view of the side that has to move next.
    Checkmate means the other side won.
    """
    in_check = is_check(board, color_to_move, history)
    can_move = has_legal_moves(board, color_to_move, history)
    if in_check and not can_move:
        return WIN_STATUS[color_to_move.opponent]
    if not can_move:
        return Status.STALEMATE
    if in_check:
        return Status.CHECK
    return Status.PLAYING
