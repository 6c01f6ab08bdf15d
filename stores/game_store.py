from typing import Optional
from abc import ABC, abstractmethod

from models.domain_models import Game


# =========================
# GameStore Interface
# =========================

class GameStore(ABC):
    """
    Durable storage for game aggregates.

    The store knows nothing about game rules; it saves and loads whole games.
    Locking and rule checks live in `services.game_registry` and
    `services.turn_engine`.

    Invariants:
    - Each method touches exactly one game and is atomic
    - A game id is never reused
    """

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------

    async def init(self) -> None:
        """Open connections / create schema. Default: nothing to do."""

    async def close(self) -> None:
        """Release connections. Default: nothing to do."""

    @abstractmethod
    async def create_game(self, game: Game) -> None:
        """Insert a brand new game.

        Raises:
            GameAlreadyExists: If a game with this id is already stored.
            PersistenceFailure: If the write failed.
        """

    @abstractmethod
    async def save_game(self, game: Game) -> None:
        """Overwrite the stored state of an existing game.

        Raises:
            GameNotFound: If the game was never created.
            PersistenceFailure: If the write failed.
        """

    # -------------------------------------------------
    # Read-side queries (NO state changes)
    # -------------------------------------------------

    @abstractmethod
    async def find_game(self, game_id: str) -> Optional[Game]:
        """Return the stored game, or None if there is no such game.

        Raises:
            PersistenceFailure: If the read failed or the stored row is corrupt.
        """
