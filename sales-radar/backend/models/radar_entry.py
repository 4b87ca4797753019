"""Data model for monthly vehicle model sales radar records."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from utils.month_utils import MONTH_PATTERN

SOURCE_URL_TEMPLATE = "https://auto.danawa.com/auto/?Month={month}-00&Nation={nation}&Tab=Model&Work=record"


class Nation(str, Enum):
	"""Market segment of a cohort: domestic makers or imports."""

	DOMESTIC = "domestic"
	EXPORT = "export"


def build_source_url(month: str, nation: Nation | str) -> str:
	"""Build the attribution URL for a month and nation."""
	nation_value = nation.value if isinstance(nation, Nation) else str(nation)
	return SOURCE_URL_TEMPLATE.format(month=month, nation=nation_value)


class RadarEntryBase(BaseModel):
	"""Monthly sales statistics for one vehicle model within a cohort."""

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		protected_namespaces=(),
	)

	model_name: str = Field(..., min_length=1)
	manufacturer: str
	sales: int = Field(..., ge=0)
	prev_sales: int = Field(..., ge=0)
	mom_abs: int
	mom_pct: float = Field(..., allow_inf_nan=False)
	rank: int
	prev_rank: int
	rank_change: int
	nation: Nation
	month: str = Field(..., pattern=MONTH_PATTERN)
	source_url: Optional[str] = None

	@model_validator(mode="after")
	def _default_source_url(self) -> "RadarEntryBase":
		if not self.source_url:
			self.source_url = build_source_url(self.month, self.nation)
		return self

	@property
	def is_new_entry(self) -> bool:
		"""Whether the model had no prior-month sales baseline."""
		return self.prev_sales == 0

	@property
	def cohort_key(self) -> tuple[str, Nation]:
		return self.month, self.nation


class InsertRadarEntry(RadarEntryBase):
	"""Insertable shape: everything except the generated id and score."""


class RadarEntry(RadarEntryBase):
	"""Finished entry carrying the generated id and the cohort-relative score."""

	id: str
	score: float
