"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the move sets for each piece type.
The same table serves two purposes:

* pseudo-moves: where could this piece go, ignoring whether its own king is left in check afterwards
* attacks (`for_attack_only=True`): which squares does this piece threaten. Pawns only threaten diagonally,
  and the king only threatens its adjacent squares (no castling), which keeps attack detection from recursing
  back into legality checks.

Castling is added on top of these rules by the legality layer, legality itself is checked there too.
"""

from typing import Callable, Protocol, Sequence

from solo_chess.chess.history import MoveRecord, last_move
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position, Vector
from solo_chess.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, position: Position) -> Piece | None: ...


STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS

# White moves UP the board (towards row 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


def _moving_piece(position: Position, board: Board) -> Piece:
    piece = board.piece(position)
    if piece is None:
        raise ValueError(f"No piece on {position} to generate moves for.")
    return piece


# --- MOVEMENT RULES ---
def raycasting_move(
    position: Position, board: Board, directions: list[Vector]
) -> list[Position]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or the edge of the board.
    An opponent's piece is included (it can be captured), your own piece is not.
    The first blocker ends the ray either way, which is also exactly the line-of-sight needed for attacks.
    """
    player_color = _moving_piece(position, board).color

    targets: list[Position] = []
    for direction in directions:
        target = position.offset(direction)
        while target.is_within_bounds():
            piece_found = board.piece(target)
            if piece_found is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    targets.append(target)
                break

            targets.append(target)
            target = target.offset(direction)
    return targets


def single_step_move(
    position: Position,
    board: Board,
    deltas: list[Vector],
    include_friendly: bool = False,
) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just move a single step along a direction"""
    player_color = _moving_piece(position, board).color

    targets: list[Position] = []
    for delta in deltas:
        target = position.offset(delta)
        if not target.is_within_bounds():
            continue

        piece_found = board.piece(target)
        square_available = piece_found is None or piece_found.color != player_color
        if square_available or include_friendly:
            targets.append(target)
    return targets


def can_capture_en_passant(
    position: Position, target: Position, board: Board, history: Sequence[MoveRecord]
) -> bool:
    """
    En passant is only on the table right after the opponent pushed a pawn by two ranks,
    and that pawn now stands right next to yours (same row) in the column you are moving into.
    """
    previous = last_move(history)
    if previous is None:
        return False

    pawn = _moving_piece(position, board)
    return (
        previous.is_pawn_double_step()
        and previous.color != pawn.color
        and previous.from_position.col == target.col
        and previous.to_position.col == target.col
        and previous.to_position.row == position.row
    )


def candidate_pawn_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally (also en passant)

    When asking for attacks, only the diagonals count (occupied or not): a pawn never threatens the square in front of it.
    """
    pawn = _moving_piece(position, board)
    direction = PAWN_DIRECTION[pawn.color]
    diagonals = [
        target
        for target in (position.offset((direction, -1)), position.offset((direction, 1)))
        if target.is_within_bounds()
    ]
    if for_attack_only:
        return diagonals

    targets: list[Position] = []

    # Pawn pushes
    one_step = position.offset((direction, 0))
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        targets.append(one_step)

        two_steps = position.offset((2 * direction, 0))
        on_home_row = position.row == PAWN_HOME_ROW[pawn.color]
        if on_home_row and board.piece(two_steps) is None:
            targets.append(two_steps)

    # pawns take diagonally
    for target in diagonals:
        piece_found = board.piece(target)
        if piece_found is not None:
            if piece_found.color != pawn.color:
                targets.append(target)
        elif can_capture_en_passant(position, target, board, history):
            targets.append(target)
    return targets


def candidate_knight_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """Knights always jump such that |delta_row| + |delta_col| = 3"""
    return single_step_move(position, board, KNIGHT_DELTAS)


def candidate_bishop_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(position, board, DIAGONALS)


def candidate_rook_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(position, board, STRAIGHTS)


def candidate_queen_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(position, board) + candidate_bishop_moves(
        position, board
    )


def candidate_king_moves(
    position: Position,
    board: Board,
    history: Sequence[MoveRecord] = (),
    for_attack_only: bool = False,
) -> list[Position]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by the legality layer, as it needs attack detection).
    For attacks, the king threatens all its neighbours.
    """
    return single_step_move(
        position, board, KING_DELTAS, include_friendly=for_attack_only
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board, Sequence[MoveRecord], bool], list[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def attacked_squares(position: Position, board: Board) -> list[Position]:
    """Squares threatened by the piece standing on `position`"""
    piece = _moving_piece(position, board)
    return MOVEMENT_RULES[piece.type](position, board, (), True)


# -- PAWN PROMOTION --
def is_pawn_push_to_promotion_square(
    from_position: Position, to_position: Position, board: Board
) -> bool:
    """check if the move is a pawn move that reaches the far rank (from the pawn's point of view)"""
    moving_piece = board.piece(from_position)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return to_position.row == PROMOTION_ROW[moving_piece.color]
