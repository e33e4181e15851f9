"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from solo_chess.chess.pieces import PROMOTION_OPTIONS
from solo_chess.chess.position import BOARD_DIMENSIONS
from solo_chess.core.exceptions import InvalidRequestError
from solo_chess.core.shared_types import Color, PieceType, Status

FILES = "abcdefgh"[: BOARD_DIMENSIONS[1]]
RANKS = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[0] + 1))


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0] in FILES and value[1] in RANKS


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        """Only the piece placement part of a FEN string: 8 ranks separated by '/'"""
        if value is None:
            return value

        ranks = value.strip().split("/")
        if len(ranks) != BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Piece placement must contain {BOARD_DIMENSIONS[0]} '/'-separated ranks."
            )
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTION_OPTIONS:
            raise InvalidRequestError(
                f"Cannot promote into a {value}. Pick one of {', '.join(PROMOTION_OPTIONS)}."
            )
        return value


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: str
    color_to_move: Color
    status: Status
    winner: Optional[Color]
    move_history: list[str]
    captured_pieces: dict[Color, list[PieceType]]
    material: dict[Color, int]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    legal_moves: list[str]
