"""Unit tests for /solo_chess/chess/status.py"""

import pytest

from solo_chess.chess.board import STARTING_POSITION_FEN, Board
from solo_chess.chess.status import game_status, is_check, is_checkmate, is_stalemate
from solo_chess.core.shared_types import Color, Status

BACK_RANK_MATE = "R5k1/5ppp/8/8/8/8/8/6K1"
WHITE_BACK_RANK_MATE = "1k6/8/8/8/8/8/PPP5/1K5r"
CORNER_STALEMATE = "k7/8/1Q6/8/8/8/8/7K"
ROOK_CHECK = "4k3/8/8/8/8/8/8/4R1K1"


@pytest.mark.parametrize(
    "fen, color, expected",
    [
        (STARTING_POSITION_FEN, Color.WHITE, Status.PLAYING),
        (STARTING_POSITION_FEN, Color.BLACK, Status.PLAYING),
        (ROOK_CHECK, Color.BLACK, Status.CHECK),
        (BACK_RANK_MATE, Color.BLACK, Status.WHITE_WIN),
        (WHITE_BACK_RANK_MATE, Color.WHITE, Status.BLACK_WIN),
        (CORNER_STALEMATE, Color.BLACK, Status.STALEMATE),
        (CORNER_STALEMATE, Color.WHITE, Status.PLAYING),
    ],
)
def test_game_status(fen: str, color: Color, expected: Status) -> None:
    assert game_status(Board.from_fen(fen), [], color) == expected


def test_checkmate() -> None:
    board = Board.from_fen(BACK_RANK_MATE)
    assert is_check(board, Color.BLACK, [])
    assert is_checkmate(board, Color.BLACK, [])
    assert not is_stalemate(board, Color.BLACK, [])


def test_check_with_escape_is_not_checkmate() -> None:
    board = Board.from_fen(ROOK_CHECK)
    assert is_check(board, Color.BLACK, [])
    assert not is_checkmate(board, Color.BLACK, [])


def test_stalemate() -> None:
    board = Board.from_fen(CORNER_STALEMATE)
    assert not is_check(board, Color.BLACK, [])
    assert is_stalemate(board, Color.BLACK, [])
    assert not is_checkmate(board, Color.BLACK, [])


@pytest.mark.parametrize("fen", [BACK_RANK_MATE, CORNER_STALEMATE, ROOK_CHECK])
@pytest.mark.parametrize("color", list(Color))
def test_checkmate_and_stalemate_exclude_each_other(fen: str, color: Color) -> None:
    board = Board.from_fen(fen)
    assert not (is_checkmate(board, color, []) and is_stalemate(board, color, []))
