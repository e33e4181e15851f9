"""Protocol repository (the session store could later be swapped for something else, as long as it holds on to Game objects)"""

from typing import Protocol
from uuid import UUID

from solo_chess.chess.game import Game


class GameRepository(Protocol):
    """Session storage orchestration"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if a session exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: Game) -> Game | None:
        """Replace the stored game."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game session."""
        ...
