"""Unit tests for /solo_chess/chess/history.py"""

import pytest

from solo_chess.chess.castling import CastlingSide
from solo_chess.chess.history import MoveRecord, captured_pieces, last_move
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position
from solo_chess.core.shared_types import Color, PieceType

sq = Position.from_algebraic

WHITE_PAWN = Piece(PieceType.PAWN, Color.WHITE)
BLACK_PAWN = Piece(PieceType.PAWN, Color.BLACK)


@pytest.mark.parametrize(
    "record, notation, uci",
    [
        (MoveRecord(WHITE_PAWN, sq("e2"), sq("e4")), "e2e4", "e2e4"),
        (
            MoveRecord(Piece(PieceType.KNIGHT, Color.WHITE), sq("g1"), sq("f3")),
            "Ng1f3",
            "g1f3",
        ),
        (
            MoveRecord(WHITE_PAWN, sq("e7"), sq("e8"), promotion=PieceType.QUEEN),
            "e7e8=Q",
            "e7e8q",
        ),
        (
            MoveRecord(
                BLACK_PAWN,
                sq("b2"),
                sq("a1"),
                captured=Piece(PieceType.ROOK, Color.WHITE),
                promotion=PieceType.KNIGHT,
            ),
            "b2a1=N",
            "b2a1n",
        ),
        (
            MoveRecord(
                Piece(PieceType.KING, Color.BLACK),
                sq("e8"),
                sq("g8"),
                castling=CastlingSide.KINGSIDE,
            ),
            "Ke8g8",
            "e8g8",
        ),
    ],
)
def test_notation(record: MoveRecord, notation: str, uci: str) -> None:
    assert record.to_notation() == notation
    assert record.to_uci() == uci


def test_record_color_and_capture() -> None:
    record = MoveRecord(BLACK_PAWN, sq("d5"), sq("e4"), captured=WHITE_PAWN)
    assert record.color == Color.BLACK
    assert record.is_capture
    assert not MoveRecord(WHITE_PAWN, sq("e2"), sq("e3")).is_capture


@pytest.mark.parametrize(
    "record, expected",
    [
        (MoveRecord(WHITE_PAWN, sq("e2"), sq("e4")), True),
        (MoveRecord(BLACK_PAWN, sq("d7"), sq("d5")), True),
        (MoveRecord(WHITE_PAWN, sq("e2"), sq("e3")), False),
        (MoveRecord(Piece(PieceType.ROOK, Color.WHITE), sq("a1"), sq("a3")), False),
    ],
)
def test_pawn_double_step(record: MoveRecord, expected: bool) -> None:
    assert record.is_pawn_double_step() == expected


def test_last_move() -> None:
    first = MoveRecord(WHITE_PAWN, sq("e2"), sq("e4"))
    second = MoveRecord(BLACK_PAWN, sq("e7"), sq("e5"))
    assert last_move([]) is None
    assert last_move([first, second]) == second


def test_captured_pieces_grouped_by_owner() -> None:
    """Pieces are listed under the color that lost them, in capture order"""
    knight = Piece(PieceType.KNIGHT, Color.BLACK)
    history = [
        MoveRecord(WHITE_PAWN, sq("e4"), sq("d5"), captured=BLACK_PAWN),
        MoveRecord(Piece(PieceType.QUEEN, Color.BLACK), sq("d8"), sq("d5"), captured=WHITE_PAWN),
        MoveRecord(Piece(PieceType.BISHOP, Color.WHITE), sq("b5"), sq("c6"), captured=knight),
        MoveRecord(BLACK_PAWN, sq("b7"), sq("b6")),
    ]
    assert captured_pieces(history) == {
        Color.WHITE: [WHITE_PAWN],
        Color.BLACK: [BLACK_PAWN, knight],
    }


def test_captured_pieces_empty_history() -> None:
    assert captured_pieces([]) == {Color.WHITE: [], Color.BLACK: []}
