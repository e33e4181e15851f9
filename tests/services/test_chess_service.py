"""Unit tests for /solo_chess/services/chess_service.py"""

from uuid import UUID, uuid4

import pytest

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
from solo_chess.chess.board import STARTING_POSITION_FEN
from solo_chess.core.config import Settings
from solo_chess.core.exceptions import (
    GameError,
    GameNotFoundError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    PromotionRequiredError,
)
from solo_chess.core.shared_types import Color, PieceType, Status
from solo_chess.db.memory_repository import InMemoryGameRepository
from solo_chess.services.chess_service import ChessService

WHITE_MATES_IN_ONE = "6k1/5ppp/8/8/8/8/8/R5K1"
PROMOTION_POSITION = "7k/P7/8/8/8/8/8/K7"


@pytest.fixture
def repository() -> InMemoryGameRepository:
    return InMemoryGameRepository()


@pytest.fixture
def service(repository: InMemoryGameRepository) -> ChessService:
    """The computer always plays its single best move"""
    return ChessService(repository, Settings(top_candidates=1, seed=0))


def new_game_id(service: ChessService, starting_position: str | None = None) -> UUID:
    return service.create_new_game(
        CreateGameRequest(starting_position=starting_position)
    ).game_id


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(
    service: ChessService, repository: InMemoryGameRepository
) -> None:
    """Check that new game is created, stored in the repo, and the response has the appropriate information."""
    response = service.create_new_game(CreateGameRequest())

    # Check response structure
    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)

    # Check response data
    assert response.board == STARTING_POSITION_FEN
    assert response.color_to_move == Color.WHITE
    assert response.status == Status.PLAYING
    assert response.winner is None
    assert response.move_history == []
    assert response.captured_pieces == {Color.WHITE: [], Color.BLACK: []}
    assert response.material == {Color.WHITE: 39, Color.BLACK: 39}

    # Check stored session
    stored_game = repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.history == []
    assert stored_game.opponent.top_candidates == 1


def test_create_from_position(service: ChessService) -> None:
    response = service.create_new_game(
        CreateGameRequest(starting_position=WHITE_MATES_IN_ONE)
    )
    assert response.board == WHITE_MATES_IN_ONE
    assert response.material == {Color.WHITE: 5, Color.BLACK: 3}


def test_create_with_invalid_position(service: ChessService) -> None:
    """Well formed (8 ranks), but not a board: the service reports it as a bad request"""
    with pytest.raises(InvalidRequestError):
        _ = service.create_new_game(
            CreateGameRequest(starting_position="8/8/8/8/8/8/8/xxxxxxxx")
        )


@pytest.mark.parametrize(
    "starting_position",
    [
        "4k3/8/8/8/8/8/8/K3K3",  # two white kings
        "4k3/8/8/8/8/8/8/8",  # no white king
        "8/8/8/8/8/8/8/8",  # no kings at all
        "4k3/8/8/8/8/8/4R3/4K3",  # black king already in check, white to move
    ],
)
def test_create_with_unplayable_position(
    service: ChessService, repository: InMemoryGameRepository, starting_position: str
) -> None:
    with pytest.raises(InvalidRequestError):
        _ = service.create_new_game(CreateGameRequest(starting_position=starting_position))
    assert len(repository) == 0


# --- SERVICE - GAME STATE ----
def test_get_game_state(service: ChessService) -> None:
    game_id = new_game_id(service)
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.board == STARTING_POSITION_FEN


def test_get_unknown_game(service: ChessService) -> None:
    # any top-level custom exception will do
    with pytest.raises(GameError):
        _ = service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves(service: ChessService) -> None:
    game_id = new_game_id(service)
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, square="b1"))
    assert isinstance(response, LegalMovesResponse)
    assert response.legal_moves == ["a3", "c3"]

    # opponent's piece / empty square
    for square in ("b8", "e4"):
        response = service.legal_moves(LegalMovesRequest(game_id=game_id, square=square))
        assert response.legal_moves == []


# --- SERVICE - MAKE MOVE ----
def test_move_gets_a_reply(service: ChessService) -> None:
    """After the human's move, the computer answers in the same request"""
    game_id = new_game_id(service)
    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="e2", to_square="e4")
    )

    assert response.move_history == ["e2e4", "Nb8c6"]
    assert response.color_to_move == Color.WHITE
    assert response.status == Status.PLAYING

    # The stored game reflects both moves
    state = service.get_game_state(GetGameRequest(game_id=game_id))
    assert state == response


def test_illegal_move(service: ChessService, repository: InMemoryGameRepository) -> None:
    game_id = new_game_id(service)
    with pytest.raises(IllegalMoveError):
        _ = service.make_move(MoveRequest(game_id=game_id, from_square="e2", to_square="e5"))

    stored_game = repository.get_game(game_id)
    assert stored_game is not None
    assert stored_game.history == []


def test_moving_computer_piece(service: ChessService) -> None:
    game_id = new_game_id(service)
    with pytest.raises(IllegalMoveError):
        _ = service.make_move(MoveRequest(game_id=game_id, from_square="e7", to_square="e5"))


def test_checkmate_ends_game(service: ChessService) -> None:
    """No reply after mate, and no more moves afterwards"""
    game_id = new_game_id(service, WHITE_MATES_IN_ONE)
    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="a1", to_square="a8")
    )

    assert response.status == Status.WHITE_WIN
    assert response.winner == Color.WHITE
    assert response.move_history == ["Ra1a8"]

    with pytest.raises(GameStateError):
        _ = service.make_move(MoveRequest(game_id=game_id, from_square="g1", to_square="f1"))


def test_promotion(service: ChessService) -> None:
    game_id = new_game_id(service, PROMOTION_POSITION)
    with pytest.raises(PromotionRequiredError):
        _ = service.make_move(MoveRequest(game_id=game_id, from_square="a7", to_square="a8"))

    response = service.make_move(
        MoveRequest(
            game_id=game_id, from_square="a7", to_square="a8", promote_to=PieceType.QUEEN
        )
    )
    assert response.move_history[0] == "a7a8=Q"
    assert response.material[Color.WHITE] == 9


def test_captured_pieces_in_response(service: ChessService) -> None:
    game_id = new_game_id(service, "4k3/8/8/3p4/4P3/8/8/4K3")
    response = service.make_move(
        MoveRequest(game_id=game_id, from_square="e4", to_square="d5")
    )
    assert response.captured_pieces[Color.BLACK] == [PieceType.PAWN]
    assert response.material[Color.BLACK] == 0


def test_move_in_unknown_game(service: ChessService) -> None:
    with pytest.raises(GameNotFoundError):
        _ = service.make_move(MoveRequest(game_id=uuid4(), from_square="e2", to_square="e4"))


def test_same_seed_same_replies(repository: InMemoryGameRepository) -> None:
    """A fixed seed makes the computer's picks reproducible (even when sampling among several moves)"""
    histories = []
    for _ in range(2):
        service = ChessService(repository, Settings(top_candidates=3, seed=7))
        game_id = new_game_id(service)
        for from_square, to_square in [("e2", "e4"), ("d2", "d3"), ("g1", "f3")]:
            response = service.make_move(
                MoveRequest(game_id=game_id, from_square=from_square, to_square=to_square)
            )
        histories.append(response.move_history)
    assert histories[0] == histories[1]


# --- SERVICE - RESET / DELETE ----
def test_reset_game(service: ChessService) -> None:
    game_id = new_game_id(service)
    _ = service.make_move(MoveRequest(game_id=game_id, from_square="e2", to_square="e4"))

    response = service.reset_game(ResetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.board == STARTING_POSITION_FEN
    assert response.move_history == []
    assert response.status == Status.PLAYING


def test_delete_game(service: ChessService, repository: InMemoryGameRepository) -> None:
    game_id = new_game_id(service)
    service.delete_game(DeleteGameRequest(game_id=game_id))

    assert repository.get_game(game_id) is None
    with pytest.raises(GameNotFoundError):
        _ = service.get_game_state(GetGameRequest(game_id=game_id))
    with pytest.raises(GameNotFoundError):
        service.delete_game(DeleteGameRequest(game_id=game_id))
