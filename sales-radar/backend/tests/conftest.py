"""
Shared pytest fixtures for the Model Sales Radar test suite.

Provides:
  - ``make_entry``: factory for insertable radar entries with sane defaults.
  - ``store``: a fresh, empty ``RadarStore`` per test.
  - ``client``: a ``TestClient`` over an app whose lifespan seeded the demo
    cohorts for ``SEED_MONTH``.
  - ``empty_client``: same app factory with seeding disabled.
"""

from __future__ import annotations

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from models.radar_entry import InsertRadarEntry, Nation
from services.radar_store import RadarStore

SEED_MONTH = "2025-01"


# ── Domain object factories ───────────────────────────────────────────────────

@pytest.fixture
def make_entry() -> Callable[..., InsertRadarEntry]:
    """Return a factory building ``InsertRadarEntry`` objects.

    ``mom_abs`` defaults to ``sales - prev_sales`` when not supplied.
    """

    def _make(
        model_name: str = "Casper",
        manufacturer: str = "Hyundai",
        sales: int = 500,
        prev_sales: int = 400,
        mom_abs: int | None = None,
        mom_pct: float = 0.25,
        rank: int = 5,
        prev_rank: int = 7,
        rank_change: int = 2,
        nation: Nation = Nation.DOMESTIC,
        month: str = SEED_MONTH,
    ) -> InsertRadarEntry:
        return InsertRadarEntry(
            model_name=model_name,
            manufacturer=manufacturer,
            sales=sales,
            prev_sales=prev_sales,
            mom_abs=sales - prev_sales if mom_abs is None else mom_abs,
            mom_pct=mom_pct,
            rank=rank,
            prev_rank=prev_rank,
            rank_change=rank_change,
            nation=nation,
            month=month,
        )

    return _make


@pytest.fixture
def scenario_cohort(make_entry) -> list[InsertRadarEntry]:
    """Two-entry cohort: a new entrant and an established riser."""
    return [
        make_entry(
            model_name="Newcomer",
            sales=100,
            prev_sales=0,
            mom_abs=100,
            mom_pct=5.0,
            rank=3,
            prev_rank=0,
            rank_change=0,
        ),
        make_entry(
            model_name="Climber",
            sales=50,
            prev_sales=40,
            mom_abs=10,
            mom_pct=0.25,
            rank=4,
            prev_rank=6,
            rank_change=2,
        ),
    ]


# ── Store and application fixtures ────────────────────────────────────────────

@pytest.fixture
def store() -> RadarStore:
    return RadarStore()


def _test_settings(seed_demo_data: bool) -> Settings:
    return Settings(
        ENVIRONMENT="test",
        log_level="WARNING",
        seed_demo_data=seed_demo_data,
        seed_month=SEED_MONTH,
    )


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Yield a client whose app store holds the seeded demo cohorts."""
    app = create_app(_test_settings(seed_demo_data=True))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def empty_client() -> Generator[TestClient, None, None]:
    """Yield a client whose app store starts empty."""
    app = create_app(_test_settings(seed_demo_data=False))
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
