import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pytz import utc

import config
from routes import games_router, players_router
from routes.games_helpers import error_body, INVALID_PARAMETERS
from services import init_registry, reset_registry
from stores import init_stores, close_stores

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# --- Lifespan: store, registry and cache eviction ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    store = await init_stores()
    registry = init_registry(store)

    scheduler = AsyncIOScheduler(timezone=utc)
    scheduler.add_job(
        registry.evict_finished,
        trigger="interval",
        minutes=config.CACHE_EVICTION_MINUTES,
        id="evict_finished_games",
    )
    scheduler.add_job(
        registry.evict_idle,
        trigger="interval",
        minutes=config.CACHE_EVICTION_MINUTES,
        kwargs={"idle_for": timedelta(minutes=config.CACHE_IDLE_MINUTES)},
        id="evict_idle_games",
    )
    scheduler.start()
    logger.info(f"Energy War server started (db={config.DB_PATH})")
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)
        reset_registry()
        await close_stores()
        logger.info("Energy War server stopped")


# --- FastAPI setup ---
app = FastAPI(title="Energy War", lifespan=lifespan)

# --- Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content=error_body(INVALID_PARAMETERS, "malformed request"))


# --- Register routes ---
app.include_router(games_router, prefix="/api")
app.include_router(players_router, prefix="/api")
