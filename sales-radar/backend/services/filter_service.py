"""Service boundary for radar filtering, ranking and truncation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from models.radar_entry import RadarEntry

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class RadarFilter:
	"""Filter configuration applied to a scored cohort."""

	min_sales: int = 0
	exclude_new_entries: bool = False
	limit: int = DEFAULT_LIMIT


def apply_radar_filter(entries: Iterable[RadarEntry], radar_filter: RadarFilter) -> list[RadarEntry]:
	"""Filter a cohort down to rising models and rank them by score.

	Steps run in a fixed order so that ``limit`` applies to the final ranked set:
	- minimum sales threshold (only when positive)
	- new-entry exclusion (only when requested)
	- positive momentum requirement
	- score descending; equal scores keep cohort order
	- truncation to ``limit``
	"""
	candidates = list(entries)

	if radar_filter.min_sales > 0:
		candidates = [entry for entry in candidates if entry.sales >= radar_filter.min_sales]

	if radar_filter.exclude_new_entries:
		candidates = [entry for entry in candidates if not entry.is_new_entry]

	candidates = [entry for entry in candidates if entry.mom_abs > 0]

	# sorted() is stable with reverse=True, ties stay in cohort order
	ranked = sorted(candidates, key=lambda entry: entry.score, reverse=True)
	return ranked[: max(radar_filter.limit, 0)]
