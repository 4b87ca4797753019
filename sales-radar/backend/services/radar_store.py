"""In-memory repository of scored radar cohorts keyed by month and nation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from threading import RLock

from models.radar_entry import InsertRadarEntry, Nation, RadarEntry
from services.filter_service import RadarFilter, apply_radar_filter
from services.scoring_service import score_cohort

logger = logging.getLogger(__name__)

CohortKey = tuple[str, Nation]


class RadarStoreError(ValueError):
	"""Raised when a cohort write is inconsistent."""


class RadarStore:
	"""Thread-safe in-memory cohort store.

	Each (month, nation) key maps to one immutable cohort snapshot. Writes
	replace the whole snapshot in a single assignment, so readers observe
	either the previous cohort or the new one.
	"""

	def __init__(self) -> None:
		self._cohorts: dict[CohortKey, tuple[RadarEntry, ...]] = {}
		self._lock = RLock()

	@staticmethod
	def _key(month: str, nation: Nation | str) -> CohortKey:
		return month, Nation(nation)

	def get_cohort(self, month: str, nation: Nation | str) -> list[RadarEntry]:
		"""Return the stored cohort in scoring order, or an empty list."""
		with self._lock:
			return list(self._cohorts.get(self._key(month, nation), ()))

	def read(self, month: str, nation: Nation | str, radar_filter: RadarFilter) -> list[RadarEntry]:
		"""Return the filtered, ranked view of one cohort."""
		return apply_radar_filter(self.get_cohort(month, nation), radar_filter)

	def replace_cohort(self, entries: Sequence[InsertRadarEntry]) -> list[RadarEntry]:
		"""Score the entries as one cohort and swap them in for their key."""
		if not entries:
			return []

		keys = {entry.cohort_key for entry in entries}
		if len(keys) > 1:
			rendered = ", ".join(sorted(f"{month}:{nation.value}" for month, nation in keys))
			raise RadarStoreError(f"Cohort entries must share one month and nation; received {rendered}.")

		(key,) = keys
		scored = tuple(score_cohort(entries))
		with self._lock:
			self._cohorts[key] = scored

		logger.info(
			"cohort_replaced | month=%s | nation=%s | entries=%s",
			key[0],
			key[1].value,
			len(scored),
		)
		return list(scored)

	def list_months(self) -> list[str]:
		"""Return distinct stored months, most recent first."""
		with self._lock:
			months = {month for month, _ in self._cohorts}
		return sorted(months, reverse=True)

	def clear_cohort(self, month: str, nation: Nation | str) -> None:
		"""Remove one cohort; clearing a missing cohort is a no-op."""
		key = self._key(month, nation)
		with self._lock:
			removed = self._cohorts.pop(key, None)
		if removed is not None:
			logger.info("cohort_cleared | month=%s | nation=%s", key[0], key[1].value)

	def cohort_count(self) -> int:
		with self._lock:
			return len(self._cohorts)

	def reset(self) -> None:
		"""Drop every stored cohort."""
		with self._lock:
			self._cohorts.clear()
