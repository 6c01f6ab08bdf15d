"""Domain-level models used by services and stores.

These are pydantic models rather than plain dicts so that a whole game can be
deep-copied, serialized to a single JSON column, and validated on load. The
rules engine mutates them in place; the registry decides when a mutated copy
becomes the current state.
"""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional
from datetime import datetime

from pydantic import BaseModel, Field

from utils.time import now_utc


MAX_PLAYERS = 4
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 20


class GameStatus(str, Enum):
	PENDING = "PENDING"
	IN_PROGRESS = "IN_PROGRESS"
	ENDED = "END"


class PlantType(str, Enum):
	NUCLEAR = "NUCLEAR"
	GAS = "GAS"
	WIND = "WIND"
	SOLAR = "SOLAR"


class StrikeResult(str, Enum):
	HIT = "HIT"
	MISS = "MISS"


class PlantSpec(NamedTuple):
	width: int
	height: int
	capacity: int
	symbol: str

	@property
	def cells(self) -> int:
		return self.width * self.height

	def orientations(self) -> list[tuple[int, int]]:
		"""(width, height) pairs a placement may use; squares have only one."""
		if self.width == self.height:
			return [(self.width, self.height)]
		return [(self.width, self.height), (self.height, self.width)]


PLANT_SPECS: dict[str, PlantSpec] = {
	PlantType.NUCLEAR.value: PlantSpec(3, 3, 1000, "N"),
	PlantType.GAS.value: PlantSpec(2, 2, 300, "G"),
	PlantType.WIND.value: PlantSpec(2, 1, 100, "W"),
	PlantType.SOLAR.value: PlantSpec(1, 1, 25, "S"),
}


def plant_spec(plant_type: str) -> Optional[PlantSpec]:
	"""Return the footprint/capacity for a plant type, or None if unknown."""
	return PLANT_SPECS.get(plant_type)


class Plant(BaseModel):
	# kept as a plain string so unknown types reach the board validator
	type: str
	coordinates: list[str] = Field(default_factory=list)


class Board(BaseModel):
	plants: list[Plant] = Field(default_factory=list)
	hits: list[str] = Field(default_factory=list)
	misses: list[str] = Field(default_factory=list)
	total_capacity: int = 0
	capacity: int = 0


class PlayerInfo(BaseModel):
	ready: bool = False
	total_capacity: int = 0
	capacity: int = 0
	token: str
	board: Board = Field(default_factory=Board)


class Game(BaseModel):
	id: str
	status: GameStatus = GameStatus.PENDING
	turn: str = ""
	winner: Optional[str] = None
	size: int
	capacity: int
	public: bool = False
	players: dict[str, PlayerInfo] = Field(default_factory=dict)
	created_at: datetime = Field(default_factory=now_utc)
	updated_at: datetime = Field(default_factory=now_utc)

	def player_order(self) -> list[str]:
		"""Player names in turn order. Always derived, never stored."""
		return sorted(self.players)


__all__ = [
	"MAX_PLAYERS",
	"MIN_BOARD_SIZE",
	"MAX_BOARD_SIZE",
	"GameStatus",
	"PlantType",
	"StrikeResult",
	"PlantSpec",
	"PLANT_SPECS",
	"plant_spec",
	"Plant",
	"Board",
	"PlayerInfo",
	"Game",
]
