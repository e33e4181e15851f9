"""
Attack detection: is a square (usually the king's) threatened by the other side?

Uses the attack-only variant of the movement rules, so this never calls back into legality checks.
"""

from solo_chess.chess.board import Board
from solo_chess.chess.moves import attacked_squares
from solo_chess.chess.position import Position
from solo_chess.core.shared_types import Color


def is_square_attacked(board: Board, position: Position, by_color: Color) -> bool:
    """Could any piece of `by_color` capture on `position` if it were its turn?"""
    return any(
        position in attacked_squares(attacker_position, board)
        for attacker_position in board.locate_color(by_color)
    )


def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of `color` attacked by any opposing piece?

    NOTE: A board without that king is treated as 'not attacked'. It signals a corrupted game upstream, but is not a game state.
    """
    king_position = board.find_king(color)
    if king_position is None:
        return False
    return is_square_attacked(board, king_position, color.opponent)
