"""
In-memory GameStore implementations for tests.

Games are kept as JSON strings, exactly as the SQLite store keeps them, so a
test can never observe a Game object that the registry still holds a
reference to.

Example:
    >>> store = InMemoryGameStore()
    >>> registry = GameRegistry(store)
    >>> game = await registry.create(10, 1000)
    >>> assert store.saved_state(game.id).id == game.id
"""

from __future__ import annotations

import asyncio
from typing import Optional

from models.domain_models import Game
from stores import GameStore, GameAlreadyExists, GameNotFound, PersistenceFailure


class InMemoryGameStore(GameStore):
    """Dict-backed store.

    Attributes:
        rows: game id -> serialized game
        save_calls: number of successful `save_game` calls
        yield_on_save: if True, `save_game` suspends once before writing so
            concurrent callers get a chance to interleave
    """

    def __init__(self, yield_on_save: bool = False) -> None:
        self.rows: dict[str, str] = {}
        self.save_calls = 0
        self.yield_on_save = yield_on_save

    async def create_game(self, game: Game) -> None:
        if game.id in self.rows:
            raise GameAlreadyExists(f"Game {game.id} already exists")
        self.rows[game.id] = game.model_dump_json()

    async def save_game(self, game: Game) -> None:
        if self.yield_on_save:
            await asyncio.sleep(0)
        if game.id not in self.rows:
            raise GameNotFound(game.id)
        self.rows[game.id] = game.model_dump_json()
        self.save_calls += 1

    async def find_game(self, game_id: str) -> Optional[Game]:
        raw = self.rows.get(game_id)
        if raw is None:
            return None
        return Game.model_validate_json(raw)

    def saved_state(self, game_id: str) -> Game:
        """Synchronous peek at what is stored, for assertions."""
        return Game.model_validate_json(self.rows[game_id])


class FailingGameStore(InMemoryGameStore):
    """Store whose writes can be switched to fail with PersistenceFailure."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_saves = False
        self.fail_creates = False

    async def create_game(self, game: Game) -> None:
        if self.fail_creates:
            raise PersistenceFailure("simulated create failure")
        await super().create_game(game)

    async def save_game(self, game: Game) -> None:
        if self.fail_saves:
            raise PersistenceFailure("simulated save failure")
        await super().save_game(game)
