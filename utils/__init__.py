"""Utility helpers used across the project.

Make commonly used helpers available at the package level for convenience.

Exports:
- time helpers: `now_utc`, `to_iso`
- token helpers: `generate_game_id`, `generate_token`, `tokens_match`
- validation helpers: `is_valid_name`, `VALID_NAME_RE`
"""

from .time import now_utc, to_iso
from .tokens import generate_game_id, generate_token, tokens_match
from .validation import is_valid_name, VALID_NAME_RE

__all__ = [
	"now_utc",
	"to_iso",
	"generate_game_id",
	"generate_token",
	"tokens_match",
	"is_valid_name",
	"VALID_NAME_RE",
]
