from pathlib import Path
from typing import Dict, Optional
import aiosqlite

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


async def connect(db_path: str, pragmas: Optional[Dict[str, str]] = None) -> aiosqlite.Connection:
    """Open an aiosqlite connection and apply sensible pragmas.

    - Sets `row_factory` to `aiosqlite.Row` for named access.
    - Uses DELETE journal mode (WAL misbehaves on some container volumes).
    - Applies any additional PRAGMA settings supplied in `pragmas`.

    Returns an open connection; caller is responsible for closing it.
    """
    conn = await aiosqlite.connect(db_path, timeout=30.0)
    conn.row_factory = aiosqlite.Row

    await conn.execute("PRAGMA journal_mode = DELETE")
    if pragmas:
        for k, v in pragmas.items():
            await conn.execute(f"PRAGMA {k} = {v}")

    await conn.commit()
    return conn


async def apply_schema(conn: aiosqlite.Connection, schema_path: Optional[str] = None) -> None:
    """Run the schema script on an open connection.

    If `schema_path` is not provided the bundled `db/schema.sql` is used.
    """
    schema_file = Path(schema_path) if schema_path else SCHEMA_PATH
    if not schema_file.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_file}")

    await conn.executescript(schema_file.read_text())
    await conn.commit()


async def init_db(db_path: str, schema_path: Optional[str] = None) -> None:
    """Create the database file (and parent directory) if needed and apply the schema."""
    db_file = Path(db_path)
    if db_path != ":memory:" and not db_file.parent.exists():
        db_file.parent.mkdir(parents=True, exist_ok=True)

    conn = await connect(db_path)
    try:
        await apply_schema(conn, schema_path)
    finally:
        await conn.close()
