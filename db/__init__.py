"""Database package helpers.

Expose connection and initialization helpers so callers can import
from `db` directly (e.g. `from db import connect, apply_schema`).
"""

from .connections import connect, apply_schema, init_db, SCHEMA_PATH

__all__ = ["connect", "apply_schema", "init_db", "SCHEMA_PATH"]
