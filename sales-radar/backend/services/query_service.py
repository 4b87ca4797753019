"""Query boundary: request parameter coercion and radar read orchestration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from models.radar_entry import Nation, RadarEntry
from services.filter_service import DEFAULT_LIMIT, RadarFilter
from services.radar_store import RadarStore
from utils.month_utils import previous_month

DEFAULT_NATION = Nation.DOMESTIC
DEFAULT_MIN_SALES = 0

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class RadarQueryError(ValueError):
	"""Raised when a radar query carries an invalid nation."""


@dataclass(frozen=True)
class RadarQuery:
	"""Validated radar query with every default resolved."""

	month: str
	nation: Nation
	radar_filter: RadarFilter


def _parse_leading_int(raw: str | None, default: int) -> int:
	"""Parse the leading integer of a text value, falling back to ``default``."""
	if raw is None:
		return default
	match = _LEADING_INT.match(raw)
	if not match:
		return default
	return int(match.group(1))


def parse_nation(raw: str | None) -> Nation:
	"""Resolve the nation parameter, defaulting to domestic when absent."""
	if raw is None or raw == "":
		return DEFAULT_NATION
	try:
		return Nation(raw)
	except ValueError as exc:
		raise RadarQueryError("Invalid nation parameter") from exc


def parse_radar_query(
	month: str | None = None,
	nation: str | None = None,
	min_sales: str | None = None,
	exclude_new_entries: str | None = None,
	limit: str | None = None,
	today: date | None = None,
) -> RadarQuery:
	"""Build a radar query from raw text parameters.

	Only an invalid nation is rejected. Malformed numbers and booleans degrade
	to their defaults: ``minSales`` to 0, ``limit`` to 20, and
	``excludeNewEntries`` is true only for the literal string ``"true"``.
	"""
	resolved_nation = parse_nation(nation)
	resolved_month = month if month else previous_month(today)

	resolved_min_sales = max(_parse_leading_int(min_sales, DEFAULT_MIN_SALES), 0)
	resolved_limit = _parse_leading_int(limit, DEFAULT_LIMIT)
	if resolved_limit <= 0:
		resolved_limit = DEFAULT_LIMIT

	return RadarQuery(
		month=resolved_month,
		nation=resolved_nation,
		radar_filter=RadarFilter(
			min_sales=resolved_min_sales,
			exclude_new_entries=exclude_new_entries == "true",
			limit=resolved_limit,
		),
	)


def get_radar_entries(store: RadarStore, query: RadarQuery) -> list[RadarEntry]:
	"""Return the ranked radar for a validated query."""
	return store.read(query.month, query.nation, query.radar_filter)


def get_available_months(store: RadarStore) -> list[str]:
	"""Return every month with at least one stored cohort, most recent first."""
	return store.list_months()


def summarize_radar(entries: list[RadarEntry]) -> dict[str, Any]:
	"""Aggregate headline statistics over a ranked radar list."""
	if not entries:
		return {
			"count": 0,
			"total_sales": 0,
			"avg_growth": 0.0,
			"top_gainer": None,
		}

	total_sales = sum(entry.sales for entry in entries)
	avg_growth = sum(entry.mom_pct for entry in entries) / len(entries)
	return {
		"count": len(entries),
		"total_sales": total_sales,
		"avg_growth": round(float(avg_growth), 6),
		"top_gainer": entries[0],
	}
