"""Service boundary for cohort-relative composite momentum scoring."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

import numpy as np

from models.radar_entry import InsertRadarEntry, RadarEntry

MOM_PCT_CAP = 5.0

MOM_ABS_WEIGHT = 0.55
MOM_PCT_WEIGHT = 0.35
RANK_CHANGE_WEIGHT = 0.10


def z_scores(values: Sequence[float]) -> np.ndarray:
	"""Standardize values with the population standard deviation.

	A zero deviation falls back to a denominator of 1; identical values
	always map to exactly 0.
	"""
	series = np.asarray(values, dtype=np.float64)
	if series.size == 0:
		return series
	if np.all(series == series[0]):
		return np.zeros_like(series)

	mean = float(np.mean(series))
	std_dev = float(np.std(series))
	# squared deviations of subnormal values can underflow to 0
	if std_dev == 0.0:
		std_dev = 1.0
	return (series - mean) / std_dev


def composite_scores(entries: Sequence[InsertRadarEntry]) -> list[float]:
	"""Compute the weighted composite score for every entry of one cohort."""
	if not entries:
		return []

	z_mom_abs = z_scores([entry.mom_abs for entry in entries])
	z_mom_pct = z_scores([min(entry.mom_pct, MOM_PCT_CAP) for entry in entries])
	z_rank_change = z_scores([entry.rank_change for entry in entries])

	combined = (
		MOM_ABS_WEIGHT * z_mom_abs
		+ MOM_PCT_WEIGHT * z_mom_pct
		+ RANK_CHANGE_WEIGHT * z_rank_change
	)
	return [float(value) for value in combined]


def score_cohort(entries: Sequence[InsertRadarEntry]) -> list[RadarEntry]:
	"""Return finished entries with fresh ids and scores, preserving input order."""
	scores = composite_scores(entries)
	return [
		RadarEntry(
			**entry.model_dump(),
			id=str(uuid.uuid4()),
			score=score,
		)
		for entry, score in zip(entries, scores)
	]
