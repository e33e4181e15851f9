"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import random
from typing import Callable

import pytest

from solo_chess.chess.board import EMPTY_FEN, Board
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position


@pytest.fixture
def castling_board() -> Board:
    """Create a board with only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R")


@pytest.fixture
def kings_only_board() -> Board:
    """
    Create a board with only kings on their canonical starting squares.
    Add whatever pieces a test needs on top of it.
    """
    return Board.from_fen("4k3/8/8/8/8/8/8/4K3")


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with {square name: FEN character} to place pieces on an empty board"""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Position.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)
