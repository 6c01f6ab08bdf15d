import logging
import sqlite3
from typing import Optional

import aiosqlite
from pydantic import ValidationError

from db import connect, apply_schema
from models.domain_models import Game
from utils.time import to_iso
from .exceptions import (
    GameNotFound,
    GameAlreadyExists,
    PersistenceFailure,
)
from .game_store import GameStore

logger = logging.getLogger(__name__)


class SqliteGameStore(GameStore):
    """SQLite-based implementation of GameStore.

    Each game is one row; the aggregate is stored as JSON in `state`.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.db: Optional[aiosqlite.Connection] = None
        logger.info(f"[STORE] SqliteGameStore initialized with db_path: {db_path}")

    async def init(self):
        """Open the connection and make sure the schema exists. Call this after construction."""
        if self.db is not None:
            return
        self.db = await connect(self.db_path)
        await apply_schema(self.db)
        logger.info(f"[STORE] Database connection established to {self.db_path}")

    async def close(self):
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None

    def _conn(self) -> aiosqlite.Connection:
        if self.db is None:
            raise PersistenceFailure("store used before init()")
        return self.db

    @staticmethod
    def _row_values(game: Game) -> tuple:
        return (
            game.status.value,
            int(game.public),
            game.model_dump_json(),
            to_iso(game.updated_at),
        )

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------

    async def create_game(self, game: Game) -> None:
        # Raises: GameAlreadyExists, PersistenceFailure
        db = self._conn()
        status, public, state, updated_at = self._row_values(game)
        try:
            await db.execute(
                """
                INSERT INTO games (game_id, status, public, state, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (game.id, status, public, state, to_iso(game.created_at), updated_at),
            )
            await db.commit()
        except sqlite3.IntegrityError as exc:
            await db.rollback()
            raise GameAlreadyExists(f"Game {game.id} already exists") from exc
        except sqlite3.Error as exc:
            await db.rollback()
            logger.error(f"[STORE] Failed to create game {game.id}: {exc}")
            raise PersistenceFailure(f"could not create game {game.id}") from exc
        logger.info(f"[STORE] Created game {game.id}")

    async def save_game(self, game: Game) -> None:
        # Raises: GameNotFound, PersistenceFailure
        db = self._conn()
        status, public, state, updated_at = self._row_values(game)
        try:
            cursor = await db.execute(
                """
                UPDATE games SET status = ?, public = ?, state = ?, updated_at = ?
                WHERE game_id = ?
                """,
                (status, public, state, updated_at, game.id),
            )
            if cursor.rowcount == 0:
                await db.rollback()
                raise GameNotFound(game.id)
            await db.commit()
        except sqlite3.Error as exc:
            await db.rollback()
            logger.error(f"[STORE] Failed to save game {game.id}: {exc}")
            raise PersistenceFailure(f"could not save game {game.id}") from exc

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------

    async def find_game(self, game_id: str) -> Optional[Game]:
        # Raises: PersistenceFailure
        db = self._conn()
        try:
            cur = await db.execute("SELECT state FROM games WHERE game_id = ?", (game_id,))
            row = await cur.fetchone()
        except sqlite3.Error as exc:
            logger.error(f"[STORE] Failed to load game {game_id}: {exc}")
            raise PersistenceFailure(f"could not load game {game_id}") from exc

        if row is None:
            return None
        try:
            return Game.model_validate_json(row["state"])
        except ValidationError as exc:
            logger.error(f"[STORE] Stored state for game {game_id} is corrupt", exc_info=True)
            raise PersistenceFailure(f"stored state for game {game_id} is corrupt") from exc
