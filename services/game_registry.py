"""
In-memory registry of live games, fronting a `GameStore`.

Concurrency model:
- The app runs on one event loop; rule code never awaits.
- Every mutation of a game runs under that game's `asyncio.Lock`, including
  the awaited save, so writes to one game are serialized and reach the store
  in commit order. Different games do not block each other.
- Mutations are applied to a deep copy. The copy replaces the cached game
  only after the store accepted it, so readers (which take no lock) only ever
  see persisted state and a failed save leaves nothing behind.
- Games are dropped from memory only while no mutation on them is running or
  waiting, so a discarded lock never has a holder or a waiter.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Callable, TypeVar

from models.domain_models import (
    MIN_BOARD_SIZE,
    MAX_BOARD_SIZE,
    Board,
    Game,
    GameStatus,
    StrikeResult,
)
from stores import (
    GameStore,
    GameAlreadyExists,
    GameNotFound,
    InvalidParameters,
    PersistenceFailure,
    PlayerNotFound,
)
from utils.time import now_utc
from utils.tokens import generate_game_id
from . import rendering
from .turn_engine import TurnEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ID_ATTEMPTS = 10


class GameRegistry:

    def __init__(
        self,
        store: GameStore,
        *,
        engine: TurnEngine | None = None,
        id_factory: Callable[[], str] = generate_game_id,
    ):
        self.store = store
        self.engine = engine or TurnEngine()
        self.id_factory = id_factory
        self._games: dict[str, Game] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        # mutations started but not finished, per game; such games are never evicted
        self._inflight: dict[str, int] = {}

    # -------------------------------------------------
    # Internals
    # -------------------------------------------------

    def _lock_for(self, game_id: str) -> asyncio.Lock:
        lock = self._locks.get(game_id)
        if lock is None:
            lock = self._locks[game_id] = asyncio.Lock()
        return lock

    async def _load(self, game_id: str) -> Game:
        """Return the cached game, filling the cache from the store on a miss."""
        game = self._games.get(game_id)
        if game is not None:
            return game

        game = await self.store.find_game(game_id)
        if game is None:
            raise GameNotFound(f"Game {game_id} not found")
        # another coroutine may have filled the slot while we awaited; theirs wins
        return self._games.setdefault(game_id, game)

    async def _mutate(self, game_id: str, action: Callable[[Game], T]) -> T:
        self._inflight[game_id] = self._inflight.get(game_id, 0) + 1
        try:
            await self._load(game_id)
            async with self._lock_for(game_id):
                current = await self._load(game_id)
                draft = current.model_copy(deep=True)
                result = action(draft)
                draft.updated_at = now_utc()
                await self.store.save_game(draft)
                self._games[game_id] = draft
                return result
        finally:
            remaining = self._inflight[game_id] - 1
            if remaining:
                self._inflight[game_id] = remaining
            else:
                del self._inflight[game_id]

    def _evict_where(self, should_evict: Callable[[Game], bool]) -> int:
        evicted = 0
        for game_id, game in list(self._games.items()):
            if game_id in self._inflight or not should_evict(game):
                continue
            del self._games[game_id]
            self._locks.pop(game_id, None)
            evicted += 1
        return evicted

    @staticmethod
    def _player(game: Game, player_name: str):
        info = game.players.get(player_name)
        if info is None:
            raise PlayerNotFound(f"Player {player_name} not in game {game.id}")
        return info

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------

    async def create(self, size: int, capacity: int, public: bool = False) -> Game:
        """
        Create, persist and cache a new pending game.

        Raises:
            InvalidParameters: if size is outside [5, 20] or capacity <= 0
            PersistenceFailure: if no unused id could be stored
        """
        if not (MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE):
            raise InvalidParameters(f"size should be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")
        if capacity <= 0:
            raise InvalidParameters("capacity should be greater than 0")

        for _ in range(MAX_ID_ATTEMPTS):
            game_id = self.id_factory()
            if game_id in self._games:
                continue
            game = Game(id=game_id, size=size, capacity=capacity, public=public)
            try:
                await self.store.create_game(game)
            except GameAlreadyExists:
                logger.warning(f"[REGISTRY] Game id collision on {game_id}, drawing another")
                continue
            self._games.setdefault(game_id, game)
            logger.info(f"[REGISTRY] Created game {game_id} (size={size}, capacity={capacity}, public={public})")
            return game.model_copy(deep=True)

        raise PersistenceFailure(f"could not allocate a game id after {MAX_ID_ATTEMPTS} attempts")

    async def evict_finished(self) -> int:
        """Drop ended games from memory. They stay in the store and reload on demand."""
        evicted = self._evict_where(lambda g: g.status == GameStatus.ENDED)
        if evicted:
            logger.info(f"[REGISTRY] Evicted {evicted} finished games from memory")
        return evicted

    async def evict_idle(self, idle_for: timedelta) -> int:
        """Drop games of any status not updated within `idle_for`.

        Games with a mutation in progress or queued on their lock are kept, so
        a dropped lock never has waiters.
        """
        cutoff = now_utc() - idle_for
        evicted = self._evict_where(lambda g: g.updated_at < cutoff)
        if evicted:
            logger.info(f"[REGISTRY] Evicted {evicted} games idle since before {cutoff:%Y-%m-%d %H:%M}")
        return evicted

    # -------------------------------------------------
    # Mutations
    # -------------------------------------------------

    async def join(self, game_id: str, player_name: str) -> str:
        """Join a pending game; returns the new player's secret token."""
        return await self._mutate(game_id, lambda g: self.engine.join(g, player_name))

    async def set_board(self, game_id: str, player_name: str, board: Board) -> Board:
        stored = await self._mutate(game_id, lambda g: self.engine.set_board(g, player_name, board))
        return stored.model_copy(deep=True)

    async def set_ready(self, game_id: str, player_name: str) -> bool:
        """Mark a player ready; True if this started the game."""
        return await self._mutate(game_id, lambda g: self.engine.set_ready(g, player_name))

    async def strike(self, game_id: str, attacker: str, target: str, coordinate: str) -> StrikeResult:
        return await self._mutate(
            game_id, lambda g: self.engine.strike(g, attacker, target, coordinate)
        )

    # -------------------------------------------------
    # Read-side queries (NO state changes)
    # -------------------------------------------------

    async def get_game(self, game_id: str) -> Game:
        """Return a copy of the current game. Raises GameNotFound."""
        game = await self._load(game_id)
        return game.model_copy(deep=True)

    async def get_board(self, game_id: str, player_name: str) -> Board:
        game = await self._load(game_id)
        return self._player(game, player_name).board.model_copy(deep=True)

    async def get_blind_board(self, game_id: str, player_name: str) -> Board:
        game = await self._load(game_id)
        return rendering.blind_projection(self._player(game, player_name).board)

    async def render_board(self, game_id: str, player_name: str, blind: bool = False) -> str:
        game = await self._load(game_id)
        return rendering.render_board(self._player(game, player_name).board, game.size, blind)

    async def game_status(self, game_id: str) -> str:
        game = await self._load(game_id)
        return rendering.render_game_status(game)

    async def player_token(self, game_id: str, player_name: str) -> str:
        """The secret issued to a player at join, for the caller to compare."""
        game = await self._load(game_id)
        return self._player(game, player_name).token
