"""Radar API route declarations for ranked sales momentum queries and cohort writes."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dependencies import get_radar_store
from models.radar_entry import InsertRadarEntry, Nation, RadarEntry
from services.query_service import (
	RadarQuery,
	RadarQueryError,
	get_available_months,
	get_radar_entries,
	parse_nation,
	parse_radar_query,
	summarize_radar,
)
from services.radar_store import RadarStore, RadarStoreError

router = APIRouter(prefix="/radar", tags=["radar"])


class RadarSummary(BaseModel):
	"""Headline statistics over one ranked radar result."""

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	month: str
	nation: Nation
	count: int
	total_sales: int
	avg_growth: float
	top_gainer: Optional[RadarEntry] = None


class CohortClearResponse(BaseModel):
	status: str
	month: str
	nation: Nation


def _build_query(
	month: Optional[str],
	nation: Optional[str],
	min_sales: Optional[str],
	exclude_new_entries: Optional[str],
	limit: Optional[str],
) -> RadarQuery:
	"""Translate raw query parameters, mapping an invalid nation to a client error."""
	try:
		return parse_radar_query(
			month=month,
			nation=nation,
			min_sales=min_sales,
			exclude_new_entries=exclude_new_entries,
			limit=limit,
		)
	except RadarQueryError as exc:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=List[RadarEntry], summary="Ranked rising models for a month and nation")
def radar_entries(
	month: Optional[str] = Query(default=None),
	nation: Optional[str] = Query(default=None),
	min_sales: Optional[str] = Query(default=None, alias="minSales"),
	exclude_new_entries: Optional[str] = Query(default=None, alias="excludeNewEntries"),
	limit: Optional[str] = Query(default=None),
	store: RadarStore = Depends(get_radar_store),
) -> List[RadarEntry]:
	"""Return the filtered radar ranked by composite momentum score."""
	query = _build_query(month, nation, min_sales, exclude_new_entries, limit)
	return get_radar_entries(store, query)


@router.get("/months", response_model=List[str], summary="Months with stored cohorts")
def radar_months(store: RadarStore = Depends(get_radar_store)) -> List[str]:
	"""Return distinct stored months, most recent first."""
	return get_available_months(store)


@router.get("/summary", response_model=RadarSummary, summary="Headline statistics for a radar query")
def radar_summary(
	month: Optional[str] = Query(default=None),
	nation: Optional[str] = Query(default=None),
	min_sales: Optional[str] = Query(default=None, alias="minSales"),
	exclude_new_entries: Optional[str] = Query(default=None, alias="excludeNewEntries"),
	limit: Optional[str] = Query(default=None),
	store: RadarStore = Depends(get_radar_store),
) -> RadarSummary:
	"""Return totals and the top gainer for the same result the radar endpoint serves."""
	query = _build_query(month, nation, min_sales, exclude_new_entries, limit)
	entries = get_radar_entries(store, query)
	return RadarSummary(month=query.month, nation=query.nation, **summarize_radar(entries))


@router.put("/cohort", response_model=List[RadarEntry], summary="Replace one month and nation cohort")
def replace_cohort(
	entries: List[InsertRadarEntry],
	store: RadarStore = Depends(get_radar_store),
) -> List[RadarEntry]:
	"""Score the submitted entries as one cohort and replace the stored version."""
	try:
		return store.replace_cohort(entries)
	except RadarStoreError as exc:
		raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc


@router.delete("/cohort", response_model=CohortClearResponse, summary="Clear one month and nation cohort")
def clear_cohort(
	month: str = Query(..., min_length=1),
	nation: Optional[str] = Query(default=None),
	store: RadarStore = Depends(get_radar_store),
) -> CohortClearResponse:
	"""Remove a cohort; clearing an unknown cohort still succeeds."""
	try:
		resolved_nation = parse_nation(nation)
	except RadarQueryError as exc:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

	store.clear_cohort(month, resolved_nation)
	return CohortClearResponse(status="cleared", month=month, nation=resolved_nation)
