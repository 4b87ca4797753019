"""Calendar month helpers for YYYY-MM cohort keys."""

from __future__ import annotations

import re
from datetime import date

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

_MONTH_RE = re.compile(MONTH_PATTERN)


def format_month(year: int, month: int) -> str:
	"""Render a year/month pair as a zero-padded YYYY-MM key."""
	return f"{year:04d}-{month:02d}"


def previous_month(today: date | None = None) -> str:
	"""Return the calendar month before ``today`` as YYYY-MM."""
	current = today or date.today()
	if current.month == 1:
		return format_month(current.year - 1, 12)
	return format_month(current.year, current.month - 1)


def is_valid_month(value: str) -> bool:
	"""Return whether a value is a YYYY-MM key with a month between 01 and 12."""
	return bool(_MONTH_RE.match(value))
