# Abstractions
from .game_store import GameStore

# Exceptions
from .exceptions import (
    StoreError,
    NotFound,
    GameNotFound,
    PlayerNotFound,
    PersistenceFailure,
    GameAlreadyExists,
    GameStoreError,
    InvalidParameters,
    GameAlreadyStarted,
    GameFull,
    PlayerAlreadyExists,
    BoardNotSet,
    InvalidCoordinate,
    InvalidBoard,
    EmptyBoard,
    InvalidPlantType,
    OverlappingPlants,
    InvalidPlantShape,
    CapacityOutOfRange,
    AlreadyStruck,
    NotInProgress,
    NotYourTurn,
    InvalidPlayer,
)

# Concrete implementations are private; only abstract interfaces are exported.
from .sqlite_game_store import SqliteGameStore as _SqliteGameStore

__all__ = [
    # Abstractions
    "GameStore",
    # Exceptions
    "StoreError",
    "NotFound",
    "GameNotFound",
    "PlayerNotFound",
    "PersistenceFailure",
    "GameAlreadyExists",
    "GameStoreError",
    "InvalidParameters",
    "GameAlreadyStarted",
    "GameFull",
    "PlayerAlreadyExists",
    "BoardNotSet",
    "InvalidCoordinate",
    "InvalidBoard",
    "EmptyBoard",
    "InvalidPlantType",
    "OverlappingPlants",
    "InvalidPlantShape",
    "CapacityOutOfRange",
    "AlreadyStruck",
    "NotInProgress",
    "NotYourTurn",
    "InvalidPlayer",
    # Runtime helpers
    "init_stores",
    "close_stores",
    "get_game_store",
]


# Runtime singletons and initialization helpers
from typing import Optional
import config

# Use the abstract interface for typing; the actual instance is a _SqliteGameStore
game_store: Optional[GameStore] = None


async def init_stores(db_path: str | None = None) -> GameStore:
    """Initialize the module-level store singleton for this process.

    Safe to call more than once; later calls return the existing store.
    """
    global game_store

    if game_store is None:
        store = _SqliteGameStore(db_path or config.DB_PATH)
        await store.init()
        game_store = store
    return game_store


async def close_stores() -> None:
    global game_store
    if game_store is not None:
        await game_store.close()
        game_store = None


def get_game_store() -> GameStore:
    """Get the game store. `init_stores` must have run (app startup does this)."""
    if game_store is None:
        raise RuntimeError("Game store not initialized; call init_stores() first")
    return game_store
