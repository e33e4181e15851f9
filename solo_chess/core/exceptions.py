"""
Exceptions raised at the boundaries of the domain layer.

The rules engine itself never raises while answering questions about a position (illegal moves simply are not generated).
Errors only show up when a caller tries to act on the game: apply a move, move out of turn, or send a malformed request.
"""


class GameError(Exception):
    """Base class for everything the chess domain / service layer raises on purpose."""


class IllegalMoveError(GameError):
    """The requested move is not in the set of legal moves for that piece."""


class PromotionRequiredError(IllegalMoveError):
    """A pawn reaches its last rank, but no piece type to promote into was supplied."""


class NotYourTurnError(GameError):
    """A side tried to move while it is the other side's turn."""


class GameStateError(GameError):
    """The game is not in a state that accepts the requested action (ex. it already ended)."""


class InvalidRequestError(GameError):
    """Malformed input at the service boundary (square names, promotion choices, ...)"""


class InvalidFENError(GameError):
    """A FEN piece-placement string could not be parsed into a board."""


class RepositoryError(GameError):
    """Something went wrong while storing / fetching a game session."""


class GameNotFoundError(RepositoryError):
    """No session is stored under the requested game ID."""
