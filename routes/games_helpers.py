"""
Helpers shared by the HTTP routes.

Routes stay thin: they check the caller's secret, call one registry
operation and turn the outcome (or the raised `StoreError`) into a response.
"""
import logging
from typing import Optional

from fastapi.responses import JSONResponse

from models import ErrorResponse
from services import GameRegistry
from stores import StoreError, NotFound, PersistenceFailure
from utils.tokens import tokens_match

logger = logging.getLogger(__name__)

MISSING_TOKEN = "MISSING_TOKEN"
INVALID_TOKEN = "INVALID_TOKEN"
INVALID_PARAMETERS = "INVALID_PARAMETERS"


class UnauthorizedException(Exception):
	"""Raised when a player's secret is missing or does not match."""

	def __init__(self, code: str, message: str = ""):
		super().__init__(message or code)
		self.code = code


def error_body(code: str, detail: Optional[str] = None) -> dict:
	return ErrorResponse(error=code, detail=detail).model_dump()


def error_response(exc: StoreError) -> JSONResponse:
	"""Map a store/engine error to its HTTP status and error body."""
	if isinstance(exc, NotFound):
		status_code = 404
	elif isinstance(exc, PersistenceFailure):
		status_code = 500
	else:
		status_code = 400
	return JSONResponse(status_code=status_code, content=error_body(exc.code, str(exc)))


def unauthorized_response(exc: UnauthorizedException) -> JSONResponse:
	return JSONResponse(status_code=403, content=error_body(exc.code, str(exc)))


def bad_request(detail: str, code: str = INVALID_PARAMETERS) -> JSONResponse:
	return JSONResponse(status_code=400, content=error_body(code, detail))


async def check_player_token(
	registry: GameRegistry,
	game_id: str,
	player_name: str,
	token: Optional[str],
) -> None:
	"""
	Verify that `token` is the secret issued to `player_name` in `game_id`.

	An unknown game or player is reported as an invalid token so that the
	check does not reveal which part was wrong.

	Raises:
		UnauthorizedException: MISSING_TOKEN or INVALID_TOKEN
		PersistenceFailure: if the game could not be loaded
	"""
	if not token:
		raise UnauthorizedException(MISSING_TOKEN, "token is required")
	try:
		expected = await registry.player_token(game_id, player_name)
	except NotFound:
		logger.warning(f"Token check for unknown game/player {game_id}/{player_name}")
		raise UnauthorizedException(INVALID_TOKEN, "invalid token")
	if not tokens_match(expected, token):
		logger.warning(f"Invalid token for player {player_name} in game {game_id}")
		raise UnauthorizedException(INVALID_TOKEN, "invalid token")
