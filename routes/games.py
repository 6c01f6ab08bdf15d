from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from models import JoinResponse, PublicGameView
from services import get_registry
from stores import StoreError
from utils.validation import is_valid_name
from . import games_helpers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/games")
async def create_game(size: int = 10, capacity: int = 1000, public: bool = False, registry = Depends(get_registry)):
	try:
		game = await registry.create(size, capacity, public)
	except StoreError as exc:
		logger.warning(f"Rejected game creation (size={size}, capacity={capacity}): {exc}")
		return games_helpers.error_response(exc)
	return JSONResponse(content=PublicGameView.from_game(game).model_dump(mode="json"))


@router.get("/games/{game_id}")
async def get_game(game_id: str, registry = Depends(get_registry)):
	try:
		game = await registry.get_game(game_id)
	except StoreError as exc:
		return games_helpers.error_response(exc)
	return JSONResponse(content=PublicGameView.from_game(game).model_dump(mode="json"))


@router.get("/games/{game_id}/status")
async def get_game_status(game_id: str, registry = Depends(get_registry)):
	return await get_game(game_id, registry)


@router.get("/games/{game_id}/status/text", response_class=PlainTextResponse)
async def get_game_status_text(game_id: str, registry = Depends(get_registry)):
	try:
		text = await registry.game_status(game_id)
	except StoreError as exc:
		return games_helpers.error_response(exc)
	return PlainTextResponse(text)


@router.post("/games/{game_id}/join")
async def join_game(game_id: str, player: str | None = None, registry = Depends(get_registry)):
	if not is_valid_name(player):
		return games_helpers.bad_request("Invalid player name. (Use only letters, numbers, spaces, and .'-_`’· characters.)")

	try:
		token = await registry.join(game_id, player)
	except StoreError as exc:
		logger.info(f"Player {player} could not join game {game_id}: {exc}")
		return games_helpers.error_response(exc)
	return JSONResponse(content=JoinResponse(token=token).model_dump())
