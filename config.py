import os
from pathlib import Path

# Path to the SQLite database file used by stores. Can be overridden
# using the ENERGYWAR_DB_PATH environment variable.
DB_PATH = os.environ.get("ENERGYWAR_DB_PATH", str(Path(__file__).parent / "energywar.sqlite3"))

# Length of generated game ids and per-player secret tokens. Tokens are the
# only credential a player holds, so keep them long.
GAME_ID_LENGTH = int(os.environ.get("ENERGYWAR_GAME_ID_LENGTH", "8"))
TOKEN_LENGTH = int(os.environ.get("ENERGYWAR_TOKEN_LENGTH", "16"))

# A board's total capacity must lie in [C, floor(C * factor)] where C is the
# capacity the game was created with.
CAPACITY_UPPER_FACTOR = float(os.environ.get("ENERGYWAR_CAPACITY_UPPER_FACTOR", "2.0"))

# How often finished games are dropped from the in-memory registry.
CACHE_EVICTION_MINUTES = int(os.environ.get("ENERGYWAR_CACHE_EVICTION_MINUTES", "60"))

CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("ENERGYWAR_CORS_ORIGINS", "http://localhost:8080").split(",")
    if o.strip()
]

LOG_LEVEL = os.environ.get("ENERGYWAR_LOG_LEVEL", "INFO")

# Games of any status untouched for this long are dropped from memory too;
# they reload from the store on the next request.
CACHE_IDLE_MINUTES = int(os.environ.get("ENERGYWAR_CACHE_IDLE_MINUTES", "1440"))
