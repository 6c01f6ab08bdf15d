"""Validation helpers used by route handlers.

The rules engine trusts the names it is given; anything that arrives over
HTTP goes through here first.
"""
import regex as re


# Allow: any Unicode letter/mark/number, spaces, plus a small, explicit set of name punctuation
VALID_NAME_RE = re.compile(r"^[\p{L}\p{M}\p{N} .'\-_`’·]+$", flags=re.UNICODE)

MAX_NAME_LENGTH = 64


def is_valid_name(s: str | None) -> bool:
	"""Return True if `s` is a reasonable player name.

	- Rejects empty and whitespace-only names.
	- Rejects names with leading/trailing whitespace so that two players
	  cannot differ only by padding.
	- Uses Unicode-aware character class matching.
	"""
	if not s or s.isspace():
		return False
	if s != s.strip():
		return False
	if len(s) > MAX_NAME_LENGTH:
		return False
	return bool(VALID_NAME_RE.match(s))
