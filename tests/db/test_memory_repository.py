"""Unit tests for /solo_chess/db/memory_repository.py"""

import threading
from uuid import UUID, uuid4

import pytest

from solo_chess.chess.game import Game
from solo_chess.chess.position import Position
from solo_chess.db.memory_repository import InMemoryGameRepository


@pytest.fixture
def repository() -> InMemoryGameRepository:
    return InMemoryGameRepository()


def test_create_and_get_game(repository: InMemoryGameRepository) -> None:
    game = Game.new_game()
    game_id = repository.create_game(game)

    assert isinstance(game_id, UUID)
    assert repository.get_game(game_id) is game
    assert len(repository) == 1


def test_every_game_gets_its_own_id(repository: InMemoryGameRepository) -> None:
    ids = {repository.create_game(Game.new_game()) for _ in range(5)}
    assert len(ids) == 5
    assert len(repository) == 5


def test_get_unknown_game(repository: InMemoryGameRepository) -> None:
    assert repository.get_game(uuid4()) is None


def test_update_game(repository: InMemoryGameRepository) -> None:
    game_id = repository.create_game(Game.new_game())

    updated = Game.new_game()
    updated.make_move(Position.from_algebraic("e2"), Position.from_algebraic("e4"))
    assert repository.update_game(game_id, updated) is updated

    stored = repository.get_game(game_id)
    assert stored is not None
    assert len(stored.history) == 1


def test_update_unknown_game(repository: InMemoryGameRepository) -> None:
    """Updating never creates a session"""
    assert repository.update_game(uuid4(), Game.new_game()) is None
    assert len(repository) == 0


def test_delete_game(repository: InMemoryGameRepository) -> None:
    game = Game.new_game()
    game_id = repository.create_game(game)

    assert repository.delete_game(game_id) is game
    assert repository.get_game(game_id) is None
    assert repository.delete_game(game_id) is None
    assert len(repository) == 0


def test_concurrent_creates(repository: InMemoryGameRepository) -> None:
    """Several clients opening sessions at the same time"""

    def create_games() -> None:
        for _ in range(20):
            repository.create_game(Game.new_game())

    threads = [threading.Thread(target=create_games) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(repository) == 80
