"""Services package: the game engine and the registry that fronts the store.

Import submodules to make them available as `services.coordinates`,
`services.turn_engine`, etc. The process-wide registry is created once at
startup by `init_registry` and handed to routes through `get_registry`.
"""

from typing import Optional

from stores import GameStore
from . import coordinates, board_validation, rendering
from .turn_engine import TurnEngine
from .game_registry import GameRegistry

__all__ = [
	"coordinates",
	"board_validation",
	"rendering",
	"TurnEngine",
	"GameRegistry",
	"init_registry",
	"reset_registry",
	"get_registry",
]


registry: Optional[GameRegistry] = None


def init_registry(store: GameStore) -> GameRegistry:
	"""Create the module-level registry around `store`. Later calls return the existing one."""
	global registry

	if registry is None:
		registry = GameRegistry(store)
	return registry


def reset_registry() -> None:
	global registry
	registry = None


def get_registry() -> GameRegistry:
	"""FastAPI dependency. `init_registry` must have run (app startup does this)."""
	if registry is None:
		raise RuntimeError("Game registry not initialized; call init_registry() first")
	return registry
