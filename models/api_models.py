"""Pydantic request/response models for the FastAPI endpoints.

Keep transport concerns (validation, docs) here and keep business/domain
types in `models.domain_models`.
"""
from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Optional

from .domain_models import Board, Game, GameStatus, Plant, StrikeResult


class BoardRequest(BaseModel):
	plants: list[Plant] = Field(default_factory=list)

	def to_board(self) -> Board:
		return Board(plants=self.plants)


class JoinResponse(BaseModel):
	token: str


class ReadyResponse(BaseModel):
	result: str = "OK"
	started: bool = False


class StrikeResponse(BaseModel):
	status: str = "OK"
	result: StrikeResult


class ErrorResponse(BaseModel):
	status: str = "ERROR"
	error: str
	detail: Optional[str] = None


class PublicPlayerView(BaseModel):
	ready: bool
	total_capacity: int
	capacity: int


class PublicGameView(BaseModel):
	"""A game as anyone may see it: no tokens, no boards."""
	id: str
	status: GameStatus
	turn: str
	winner: Optional[str] = None
	size: int
	capacity: int
	public: bool
	players: dict[str, PublicPlayerView]

	@classmethod
	def from_game(cls, game: Game) -> "PublicGameView":
		return cls(
			id=game.id,
			status=game.status,
			turn=game.turn,
			winner=game.winner,
			size=game.size,
			capacity=game.capacity,
			public=game.public,
			players={
				name: PublicPlayerView(
					ready=info.ready,
					total_capacity=info.total_capacity,
					capacity=info.capacity,
				)
				for name, info in game.players.items()
			},
		)


__all__ = [
	"BoardRequest",
	"JoinResponse",
	"ReadyResponse",
	"StrikeResponse",
	"ErrorResponse",
	"PublicPlayerView",
	"PublicGameView",
]
