"""Orchestration of communication from a client (UI / script) to the game logic and the session store (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from solo_chess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ResetGameRequest,
)
from solo_chess.chess.attacks import is_king_in_check
from solo_chess.chess.board import Board
from solo_chess.chess.game import Game
from solo_chess.chess.opponent import OpponentSelector
from solo_chess.chess.position import Position
from solo_chess.core.config import Settings
from solo_chess.core.exceptions import GameNotFoundError, InvalidFENError, InvalidRequestError
from solo_chess.core.shared_types import COMPUTER_COLOR, HUMAN_COLOR, Color, PieceType
from solo_chess.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a game against the computer."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings()

    # -- client request logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """The human wants to start a new game (white to move)."""
        board = self._starting_board(request.starting_position)
        new_game = Game.new_game(opponent=self._create_opponent(), board=board)
        game_id = self.repo.create_game(new_game)
        logger.info("created game %s", game_id)
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by the frontend to redraw the board / move list / captured pieces.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the squares the selected piece can move to (for highlighting)."""
        game = self._fetch_game(request.game_id)
        targets = game.legal_moves(Position.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=sorted(target.to_algebraic() for target in targets),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        The human makes a move attempt.
        If the game goes on afterwards, the computer answers right away, so the response shows the position after its reply.
        """
        game = self._fetch_game(request.game_id)

        game.make_move(
            Position.from_algebraic(request.from_square),
            Position.from_algebraic(request.to_square),
            request.promote_to,
        )
        if game.is_in_progress and game.color_to_move == COMPUTER_COLOR:
            game.computer_move()

        self.repo.update_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Start over in the same session."""
        game = self._fetch_game(request.game_id)
        game.reset()
        self.repo.update_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to end a session."""
        if self.repo.delete_game(request.game_id) is None:
            raise GameNotFoundError(f"Game with {request.game_id=} not found.")
        logger.info("deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_opponent(self) -> OpponentSelector:
        return OpponentSelector(
            top_candidates=self.settings.top_candidates, rng=self.settings.rng()
        )

    def _starting_board(self, starting_position: Optional[str]) -> Optional[Board]:
        if starting_position is None:
            return None
        try:
            board = Board.from_fen(starting_position)
        except InvalidFENError as exc:
            raise InvalidRequestError(str(exc)) from exc
        self._assert_playable(board)
        return board

    def _assert_playable(self, board: Board) -> None:
        """
        A custom starting position must be a position a real game could be in
        ----

        * exactly one king per color
        * the side that does not move first (the computer) is not in check: its king could be captured right away
        """
        for color in Color:
            kings = [
                piece
                for _, piece in board.pieces()
                if piece.type == PieceType.KING and piece.color == color
            ]
            if len(kings) != 1:
                raise InvalidRequestError(
                    f"Starting position needs exactly one {color} king, found {len(kings)}."
                )
        if is_king_in_check(board, COMPUTER_COLOR):
            raise InvalidRequestError(
                f"Starting position has the {COMPUTER_COLOR} king in check while {HUMAN_COLOR} is to move."
            )

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            board=game.board.to_fen(),
            color_to_move=game.color_to_move,
            status=game.status,
            winner=game.winner,
            move_history=game.notation(),
            captured_pieces={
                color: [piece.type for piece in pieces]
                for color, pieces in game.captured_pieces.items()
            },
            material=game.board.count_material(),
        )

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game
