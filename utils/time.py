"""Time utilities: timezone-aware helpers and ISO formatting.

Stored timestamps are always UTC so that games created on different hosts
compare correctly.
"""
from datetime import datetime, timezone


def now_utc() -> datetime:
	"""Return current UTC datetime with tzinfo set."""
	return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
	"""Serialize a datetime to ISO8601 string, seconds precision."""
	return dt.isoformat(timespec="seconds")
