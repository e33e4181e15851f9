"""Implementation of (Game)Repository keeping every session in memory. Nothing outlives the process."""

import threading
from uuid import UUID, uuid4

from solo_chess.chess.game import Game


class InMemoryGameRepository:
    """Sessions stored in a dictionary, guarded by a lock"""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if a session exists."""
        with self._lock:
            return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        new_id = uuid4()
        with self._lock:
            self._games[new_id] = game
        return new_id

    def update_game(self, game_id: UUID, game: Game) -> Game | None:
        """Replace the stored game."""
        with self._lock:
            if game_id not in self._games:
                return None
            self._games[game_id] = game
            return game

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game session."""
        with self._lock:
            return self._games.pop(game_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
