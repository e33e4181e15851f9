"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating a turn: the human (white) moves, then the automated opponent (black) replies.
After every move the status gets recomputed from the board + history.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from solo_chess.chess import rules
from solo_chess.chess.board import Board
from solo_chess.chess.history import MoveHistory, MoveRecord
from solo_chess.chess.opponent import OpponentSelector
from solo_chess.chess.pieces import Piece
from solo_chess.chess.position import Position
from solo_chess.chess.status import game_status
from solo_chess.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from solo_chess.core.shared_types import (
    COMPUTER_COLOR,
    HUMAN_COLOR,
    Color,
    PieceType,
    Status,
)

logger = logging.getLogger(__name__)

IN_PROGRESS: tuple[Status, ...] = (Status.PLAYING, Status.CHECK)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    history: MoveHistory
    color_to_move: Color
    status: Status
    opponent: OpponentSelector = field(default_factory=OpponentSelector)

    @classmethod
    def new_game(
        cls, opponent: Optional[OpponentSelector] = None, board: Optional[Board] = None
    ) -> Self:
        """Standard starting position (unless a board is given), white to move."""
        board = board if board is not None else rules.new_game()
        return cls(
            board=board,
            history=[],
            color_to_move=HUMAN_COLOR,
            status=game_status(board, [], HUMAN_COLOR),
            opponent=opponent or OpponentSelector(),
        )

    @property
    def is_in_progress(self) -> bool:
        return self.status in IN_PROGRESS

    @property
    def winner(self) -> Optional[Color]:
        """Only a checkmate has a winner."""
        if self.status == Status.WHITE_WIN:
            return Color.WHITE
        if self.status == Status.BLACK_WIN:
            return Color.BLACK
        return None

    @property
    def captured_pieces(self) -> dict[Color, list[Piece]]:
        return rules.captured_pieces(self.history)

    def notation(self) -> list[str]:
        return [move.to_notation() for move in self.history]

    def legal_moves(self, position: Position) -> set[Position]:
        """
        Where can the piece on `position` go?
        ----

        Only pieces of the side to move have moves. Asking about an empty square / an opponent's piece gives an empty set.
        """
        self._assert_in_progress()
        piece = self.board.piece(position)
        if piece is None or piece.color != self.color_to_move:
            return set()
        return rules.legal_moves(self.board, position, self.history)

    def make_move(
        self,
        from_position: Position,
        to_position: Position,
        promotion: Optional[PieceType] = None,
    ) -> MoveRecord:
        """
        The human attempts a move
        -----

        1. make sure the game is (still) in progress and it is the human's turn
        2. make sure the human moves one of their own pieces
        3. play the move (the rules engine rejects anything illegal, or a promotion without a piece type)
        4. update the history / turn / status
        """
        self._assert_in_progress()
        self._assert_turn(HUMAN_COLOR)

        piece = self.board.piece(from_position)
        if piece is None or piece.color != HUMAN_COLOR:
            raise IllegalMoveError(f"No {HUMAN_COLOR} piece on {from_position}.")

        new_board, record = rules.apply_move(
            self.board, from_position, to_position, self.history, promotion
        )
        self._commit(new_board, record)
        return record

    def computer_move(self) -> Optional[MoveRecord]:
        """
        The automated opponent plays its move.
        None if it had nothing to play, in which case the status reflects the checkmate / stalemate.
        """
        self._assert_in_progress()
        self._assert_turn(COMPUTER_COLOR)

        result = self.opponent.play(self.board, self.history)
        if result.move is None:
            self._update_status()
            return None

        self._commit(result.board, result.move)
        return result.move

    def reset(self) -> None:
        """Back to the starting position. The only moment history gets cleared."""
        self.board = rules.new_game()
        self.history.clear()
        self.color_to_move = HUMAN_COLOR
        self._update_status()
        logger.info("game reset")

    # -- PRIVATE HELPERS ---
    def _commit(self, board: Board, record: MoveRecord) -> None:
        self.board = board
        self.history.append(record)
        self.color_to_move = self.color_to_move.opponent
        self._update_status()

    def _update_status(self) -> None:
        """Status from the point of view of the side that moves next."""
        self.status = game_status(self.board, self.history, self.color_to_move)
        if not self.is_in_progress:
            logger.info("game over after %d moves: %s", len(self.history), self.status)

    def _assert_in_progress(self) -> None:
        if not self.is_in_progress:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_turn(self, color: Color) -> None:
        """You must wait for your turn before making a move."""
        if self.color_to_move != color:
            raise NotYourTurnError(
                f"It is not {color}'s turn. Waiting for {self.color_to_move} to make a move first."
            )
