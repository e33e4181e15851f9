"""The Game board: a fixed 8x8 grid of squares, each holding at most one piece. Pure data + lookups, no chess rules."""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from solo_chess.chess.pieces import FEN_TO_PIECE, Piece
from solo_chess.chess.position import BOARD_DIMENSIONS, Position
from solo_chess.core.exceptions import InvalidFENError
from solo_chess.core.shared_types import Color, PieceType

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * BOARD_DIMENSIONS[0])

Grid = list[list[Optional[Piece]]]


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass
class Board:
    squares: Grid = field(default_factory=_empty_grid)

    @classmethod
    def starting_position(cls) -> Self:
        """Standard starting position: 16 pieces per color, all unmoved."""
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), reading a8 through h8
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces

        NOTE: FEN does not tell whether a piece has moved before. All pieces start out as unmoved.
        """
        placement = fen_str.strip().split(" ")[0]
        fen_by_ranks = placement.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[0]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[0]} ranks separated by '/', got {len(fen_by_ranks)}: {fen_str!r}"
            )

        board = cls()
        # FEN string is read from top rank (8th), which conveniently is row 0
        for row, fen_one_rank in enumerate(fen_by_ranks):
            col = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if character.lower() not in FEN_TO_PIECE:
                    raise InvalidFENError(
                        f"Unknown piece {character!r} in FEN string {fen_str!r}"
                    )
                if col >= BOARD_DIMENSIONS[1]:
                    raise InvalidFENError(f"Rank {fen_one_rank!r} is too long.")
                board.squares[row][col] = Piece.from_fen(character)
                col += 1

            if col != BOARD_DIMENSIONS[1]:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} does not describe exactly {BOARD_DIMENSIONS[1]} squares."
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.squares[row]:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Structural copy. Pieces get copied by value, so changing the copy never touches this board."""
        return type(self)(
            [[piece.copy() if piece else None for piece in row] for row in self.squares]
        )

    def piece(self, position: Position) -> Optional[Piece]:
        """None for an empty square, or a square that is off the board"""
        if not position.is_within_bounds():
            return None
        return self.squares[position.row][position.col]

    def is_empty(self, position: Position) -> bool:
        return self.piece(position) is None

    def place_piece(self, piece: Piece, position: Position) -> None:
        self.squares[position.row][position.col] = piece

    def remove_piece(self, position: Position) -> Optional[Piece]:
        piece = self.squares[position.row][position.col]
        self.squares[position.row][position.col] = None
        return piece

    def pieces(self) -> Iterator[tuple[Position, Piece]]:
        """Walk the occupied squares, row by row (a8 ... h1)"""
        for row, pieces_on_row in enumerate(self.squares):
            for col, piece in enumerate(pieces_on_row):
                if piece is not None:
                    yield Position(row, col), piece

    def locate_color(self, color: Color) -> list[Position]:
        return [position for position, piece in self.pieces() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Position]:
        """None if the king is missing (should never happen in a real game)"""
        return next(
            (
                position
                for position, piece in self.pieces()
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        material = {color: 0 for color in Color}
        for _, piece in self.pieces():
            material[piece.color] += piece.points
        return material
