"""
Shared exception definitions for the game store and the rules engine.

Hierarchy:
- StoreError (base for all errors surfaced to the transport layer)
  - NotFound (game or player lookups)
  - PersistenceFailure (the durable store rejected or failed a write/read)
  - GameAlreadyExists (id collision inside the store)
  - GameStoreError (rule violations; never retryable)

Every class carries a stable `code` the transport layer returns verbatim.
"""


# =========================
# Base exception
# =========================

class StoreError(Exception):
    """Base exception for all store-related errors."""
    retryable: bool = True
    code: str = "INTERNAL_ERROR"


class NotFound(StoreError):
    retryable = False
    code = "NOT_FOUND"


class GameNotFound(NotFound):
    code = "GAME_NOT_FOUND"


class PlayerNotFound(NotFound):
    code = "PLAYER_NOT_FOUND"


class PersistenceFailure(StoreError):
    retryable = True
    code = "PERSISTENCE_FAILURE"
    #the in-memory view is never ahead of the durable one when this is raised


class GameAlreadyExists(StoreError):
    retryable = False
    code = "GAME_ALREADY_EXISTS"


# =========================
# Rule violations
# =========================

class GameStoreError(StoreError):
    """Base exception for rejected game operations."""
    retryable = False
    code = "GAME_ERROR"


class InvalidParameters(GameStoreError):
    code = "INVALID_PARAMETERS"


class GameAlreadyStarted(GameStoreError):
    code = "GAME_ALREADY_STARTED"


class GameFull(GameStoreError):
    code = "GAME_FULL"


class PlayerAlreadyExists(GameStoreError):
    code = "PLAYER_ALREADY_EXISTS"


class BoardNotSet(GameStoreError):
    code = "BOARD_NOT_SET"


class InvalidCoordinate(GameStoreError):
    code = "INVALID_COORDINATES"


class InvalidBoard(GameStoreError):
    code = "INVALID_BOARD"


class EmptyBoard(InvalidBoard):
    code = "EMPTY_BOARD"


class InvalidPlantType(InvalidBoard):
    code = "INVALID_PLANT_TYPE"


class OverlappingPlants(InvalidBoard):
    code = "OVERLAPPING_PLANTS"


class InvalidPlantShape(InvalidBoard):
    code = "INVALID_PLANT_SHAPE"


class CapacityOutOfRange(InvalidBoard):
    code = "CAPACITY_OUT_OF_RANGE"


class AlreadyStruck(GameStoreError):
    code = "ALREADY_STRUCK"


class NotInProgress(GameStoreError):
    code = "NOT_IN_PROGRESS"


class NotYourTurn(GameStoreError):
    code = "NOT_YOUR_TURN"


class InvalidPlayer(GameStoreError):
    code = "INVALID_PLAYER"
