"""
The automated opponent
----

One-ply heuristic player: every legal move gets played on a scratch board, the resulting position is scored,
and a move is picked at random among the best few. No search beyond the immediate position.

Scoring (from the point of view of the automated side):

* 10x the value of the captured piece (pawn 1, knight 3, bishop 3, rook 5, queen 9)
* +5 for giving check, +1000 for giving checkmate
* +1 for landing in the centre (the 4x4 block in the middle)
* +0.1 per row a pawn has advanced from its own back rank
* +2 for developing a knight/bishop off the back rank
* -3 for moving the (unmoved) king, unless castling
* +5 for castling
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from solo_chess.chess.board import Board
from solo_chess.chess.castling import BACK_RANK
from solo_chess.chess.executor import AlwaysQueen, PromotionPolicy, execute_move
from solo_chess.chess.history import MoveRecord
from solo_chess.chess.legality import all_legal_moves
from solo_chess.chess.moves import is_pawn_push_to_promotion_square
from solo_chess.chess.position import Position
from solo_chess.chess.status import is_check, is_checkmate
from solo_chess.core.config import DEFAULT_TOP_CANDIDATES
from solo_chess.core.shared_types import COMPUTER_COLOR, Color, PieceType

logger = logging.getLogger(__name__)

CAPTURE_MULTIPLIER = 10
CHECK_BONUS = 5
CHECKMATE_BONUS = 1000
CENTER_BONUS = 1
PAWN_ADVANCE_BONUS = 0.1
DEVELOPMENT_BONUS = 2
EARLY_KING_MOVE_PENALTY = -3
CASTLING_BONUS = 5

CENTER = range(2, 6)


@dataclass(frozen=True)
class ScoredMove:
    from_position: Position
    to_position: Position
    score: float


@dataclass
class OpponentMove:
    """Board after the opponent's move, and the record of that move (None: the opponent had no legal move)."""

    board: Board
    move: Optional[MoveRecord]


def _rows_advanced(color: Color, row: int) -> int:
    return abs(row - BACK_RANK[color])


def score_move(
    board_after: Board, record: MoveRecord, history: Sequence[MoveRecord]
) -> float:
    """Score the position reached by `record` (already played on `board_after`). `history` is the history before the move."""
    color = record.color
    opponent = color.opponent
    moved = record.piece
    history_after = [*history, record]
    score = 0.0

    if record.captured is not None:
        score += record.captured.points * CAPTURE_MULTIPLIER

    if is_check(board_after, opponent, history_after):
        score += CHECK_BONUS
        # no point looking for mate if there is no check
        if is_checkmate(board_after, opponent, history_after):
            score += CHECKMATE_BONUS

    to_position = record.to_position
    if to_position.row in CENTER and to_position.col in CENTER:
        score += CENTER_BONUS

    if moved.type == PieceType.PAWN:
        score += PAWN_ADVANCE_BONUS * _rows_advanced(color, to_position.row)

    is_minor_piece = moved.type in (PieceType.KNIGHT, PieceType.BISHOP)
    if (
        is_minor_piece
        and not moved.has_moved
        and record.from_position.row == BACK_RANK[color]
    ):
        score += DEVELOPMENT_BONUS

    if moved.type == PieceType.KING and not moved.has_moved:
        score += CASTLING_BONUS if record.castling else EARLY_KING_MOVE_PENALTY

    return score


class OpponentSelector:
    """Picks (and plays) the automated side's move. Randomness is injectable so tests can pin the choice."""

    def __init__(
        self,
        color: Color = COMPUTER_COLOR,
        top_candidates: int = DEFAULT_TOP_CANDIDATES,
        rng: Optional[random.Random] = None,
        promotion_policy: Optional[PromotionPolicy] = None,
    ) -> None:
        self.color = color
        self.top_candidates = top_candidates
        self.rng = rng or random.Random()
        self.promotion_policy = promotion_policy or AlwaysQueen()

    def rank_moves(
        self, board: Board, history: Sequence[MoveRecord]
    ) -> list[ScoredMove]:
        """All legal moves, best score first. Equal scores keep board order."""
        scored_moves: list[ScoredMove] = []
        for from_position, to_position in all_legal_moves(board, self.color, history):
            board_after, record = execute_move(
                board,
                from_position,
                to_position,
                promotion=self._promotion(board, from_position, to_position),
                is_test=True,
            )
            score = score_move(board_after, record, history)
            scored_moves.append(ScoredMove(from_position, to_position, score))
        return sorted(scored_moves, key=lambda move: move.score, reverse=True)

    def choose(
        self, board: Board, history: Sequence[MoveRecord]
    ) -> Optional[ScoredMove]:
        """Uniformly random pick among the top candidates. None if there is nothing to pick from."""
        ranked = self.rank_moves(board, history)
        if not ranked:
            return None
        top_moves = ranked[: self.top_candidates]
        return self.rng.choice(top_moves)

    def play(self, board: Board, history: Sequence[MoveRecord]) -> OpponentMove:
        """
        Choose a move and execute it for real.
        The caller appends the returned record to its history (and resolves checkmate / stalemate if there is no move).
        """
        chosen = self.choose(board, history)
        if chosen is None:
            logger.info("%s has no legal moves left", self.color)
            return OpponentMove(board=board.copy(), move=None)

        new_board, record = execute_move(
            board,
            chosen.from_position,
            chosen.to_position,
            promotion=self._promotion(board, chosen.from_position, chosen.to_position),
        )
        logger.debug("%s plays %s (score %.1f)", self.color, record.to_notation(), chosen.score)
        return OpponentMove(board=new_board, move=record)

    def _promotion(
        self, board: Board, from_position: Position, to_position: Position
    ) -> Optional[PieceType]:
        if not is_pawn_push_to_promotion_square(from_position, to_position, board):
            return None
        return self.promotion_policy.choose(board, from_position, to_position)


def opponent_move(
    board: Board,
    history: Sequence[MoveRecord],
    rng: Optional[random.Random] = None,
) -> OpponentMove:
    """The automated side (black) picks and plays its move."""
    return OpponentSelector(rng=rng).play(board, history)
