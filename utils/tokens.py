"""Identifier and secret generation.

Game ids are short and meant to be typed or shared; player tokens are the
only credential a player holds. Both are drawn from `secrets`, never from a
time-seeded PRNG.
"""
import secrets
import string

import config

GAME_ID_ALPHABET = string.ascii_lowercase + string.digits
TOKEN_ALPHABET = string.ascii_letters + string.digits


def _random_string(alphabet: str, length: int) -> str:
	if length <= 0:
		raise ValueError("length must be positive")
	return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_game_id(length: int | None = None) -> str:
	"""Return a fresh lowercase alphanumeric game id."""
	return _random_string(GAME_ID_ALPHABET, length or config.GAME_ID_LENGTH)


def generate_token(length: int | None = None) -> str:
	"""Return a fresh mixed-case alphanumeric player secret."""
	return _random_string(TOKEN_ALPHABET, length or config.TOKEN_LENGTH)


def tokens_match(expected: str, supplied: str) -> bool:
	"""Exact-match comparison of a stored secret and a caller-supplied one."""
	if not expected or not supplied:
		return False
	return secrets.compare_digest(expected.encode(), supplied.encode())
