from __future__ import annotations

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List

from models.radar_entry import InsertRadarEntry, Nation, build_source_url
from services.radar_store import RadarStore
from utils.month_utils import previous_month

SEED_DIR = Path(__file__).parent / "seeds"
SEED_FILES: Dict[Nation, Path] = {
    Nation.DOMESTIC: SEED_DIR / "domestic_models.csv",
    Nation.EXPORT: SEED_DIR / "export_models.csv",
}

_INT_COLUMNS = ("sales", "prev_sales", "mom_abs", "rank", "prev_rank", "rank_change")

logger = logging.getLogger(__name__)


def _load_model_seed(path: Path) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []

    with path.open("r", encoding="utf-8") as fp:
        reader = csv.DictReader(fp)
        for row in reader:
            parsed: dict[str, object] = {
                "model_name": row["model_name"],
                "manufacturer": row["manufacturer"],
                "mom_pct": float(row["mom_pct"]),
            }
            for column in _INT_COLUMNS:
                parsed[column] = int(row[column])
            rows.append(parsed)

    return rows


SEED_MODELS_BY_NATION: Dict[Nation, List[dict[str, object]]] = {
    nation: _load_model_seed(path) for nation, path in SEED_FILES.items()
}


def get_seed_models(nation: Nation) -> list[dict[str, object]]:
    return [dict(row) for row in SEED_MODELS_BY_NATION.get(nation, [])]


def build_seed_cohort(month: str, nation: Nation) -> list[InsertRadarEntry]:
    source_url = build_source_url(month, nation)
    return [
        InsertRadarEntry(**row, nation=nation, month=month, source_url=source_url)
        for row in get_seed_models(nation)
    ]


def seed_radar_store(store: RadarStore, month: str | None = None, today: date | None = None) -> int:
    """Install the demo cohorts for every nation and return the seeded entry count."""
    seed_month = month or previous_month(today)
    seeded = 0
    for nation in Nation:
        seeded += len(store.replace_cohort(build_seed_cohort(seed_month, nation)))

    logger.info("seed_complete | month=%s | entries=%s", seed_month, seeded)
    return seeded
