from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from models import BoardRequest, ReadyResponse, StrikeResponse
from services import get_registry
from stores import StoreError, InvalidCoordinate
from .games_helpers import (
	UnauthorizedException,
	check_player_token,
	error_response,
	unauthorized_response,
	bad_request,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Player actions (token required) ---
@router.post("/games/{game_id}/players/{name}/ready")
async def set_ready(game_id: str, name: str, token: str | None = None, registry = Depends(get_registry)):
	try:
		await check_player_token(registry, game_id, name, token)
		started = await registry.set_ready(game_id, name)
	except UnauthorizedException as exc:
		return unauthorized_response(exc)
	except StoreError as exc:
		logger.info(f"Player {name} could not get ready in game {game_id}: {exc}")
		return error_response(exc)
	return JSONResponse(content=ReadyResponse(started=started).model_dump())


@router.post("/games/{game_id}/players/{name}/strike")
async def strike(
	game_id: str,
	name: str,
	token: str | None = None,
	target: str | None = None,
	y: str | None = None,
	x: str | None = None,
	registry = Depends(get_registry),
):
	try:
		await check_player_token(registry, game_id, name, token)
	except UnauthorizedException as exc:
		return unauthorized_response(exc)
	except StoreError as exc:
		return error_response(exc)

	if not target or not y or not x:
		return bad_request("target, y and x are required")
	try:
		int(x)
	except ValueError:
		return bad_request(f"x must be a number, got {x!r}", code=InvalidCoordinate.code)

	try:
		result = await registry.strike(game_id, name, target, y + x)
	except StoreError as exc:
		logger.info(f"Strike by {name} on {target} at {y}{x} rejected in game {game_id}: {exc}")
		return error_response(exc)
	return JSONResponse(content=StrikeResponse(result=result).model_dump(mode="json"))


@router.post("/games/{game_id}/players/{name}/board")
async def set_board(game_id: str, name: str, req: BoardRequest, token: str | None = None, registry = Depends(get_registry)):
	try:
		await check_player_token(registry, game_id, name, token)
		board = await registry.set_board(game_id, name, req.to_board())
	except UnauthorizedException as exc:
		return unauthorized_response(exc)
	except StoreError as exc:
		logger.info(f"Board for {name} rejected in game {game_id}: {exc}")
		return error_response(exc)
	return JSONResponse(content=board.model_dump(mode="json"))


@router.get("/games/{game_id}/players/{name}/board")
async def get_board(game_id: str, name: str, token: str | None = None, registry = Depends(get_registry)):
	try:
		await check_player_token(registry, game_id, name, token)
		board = await registry.get_board(game_id, name)
	except UnauthorizedException as exc:
		return unauthorized_response(exc)
	except StoreError as exc:
		return error_response(exc)
	return JSONResponse(content=board.model_dump(mode="json"))


@router.get("/games/{game_id}/players/{name}/board/map", response_class=PlainTextResponse)
async def get_board_map(game_id: str, name: str, token: str | None = None, registry = Depends(get_registry)):
	try:
		await check_player_token(registry, game_id, name, token)
		text = await registry.render_board(game_id, name, blind=False)
	except UnauthorizedException as exc:
		return unauthorized_response(exc)
	except StoreError as exc:
		return error_response(exc)
	return PlainTextResponse(text)


# --- Opponent views (public) ---
@router.get("/games/{game_id}/opponent/{name}/board")
async def get_opponent_board(game_id: str, name: str, registry = Depends(get_registry)):
	try:
		board = await registry.get_blind_board(game_id, name)
	except StoreError as exc:
		return error_response(exc)
	return JSONResponse(content=board.model_dump(mode="json"))


@router.get("/games/{game_id}/opponent/{name}/board/map", response_class=PlainTextResponse)
async def get_opponent_board_map(game_id: str, name: str, registry = Depends(get_registry)):
	try:
		text = await registry.render_board(game_id, name, blind=True)
	except StoreError as exc:
		return error_response(exc)
	return PlainTextResponse(text)
