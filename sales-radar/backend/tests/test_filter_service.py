"""
Tests for services/filter_service.py.

What we test
------------
apply_radar_filter():
  - Entries with momAbs <= 0 never appear.
  - minSales keeps exactly the entries with sales >= minSales (0 disables it).
  - excludeNewEntries removes exactly the entries with prevSales == 0.
  - Output is sorted by score descending; ties keep cohort order.
  - limit truncates the final filtered ranking, never the raw cohort.
"""

from __future__ import annotations

import pytest

from models.radar_entry import RadarEntry
from services.filter_service import DEFAULT_LIMIT, RadarFilter, apply_radar_filter
from services.scoring_service import score_cohort


def _finished(make_entry, score: float, **overrides) -> RadarEntry:
    insert = make_entry(**overrides)
    return RadarEntry(**insert.model_dump(), id=f"id-{overrides.get('model_name', 'x')}", score=score)


class TestScenario:
    def test_default_filter_returns_both_ranked(self, scenario_cohort):
        result = apply_radar_filter(score_cohort(scenario_cohort), RadarFilter())
        assert [e.model_name for e in result] == ["Newcomer", "Climber"]

    def test_exclude_new_entries(self, scenario_cohort):
        result = apply_radar_filter(score_cohort(scenario_cohort), RadarFilter(exclude_new_entries=True))
        assert [e.model_name for e in result] == ["Climber"]

    def test_min_sales(self, scenario_cohort):
        result = apply_radar_filter(score_cohort(scenario_cohort), RadarFilter(min_sales=60))
        assert [e.model_name for e in result] == ["Newcomer"]

    def test_empty_cohort(self):
        assert apply_radar_filter([], RadarFilter()) == []


class TestMomentumFilter:
    def test_flat_and_negative_momentum_dropped(self, make_entry):
        entries = [
            _finished(make_entry, 0.9, model_name="Flat", sales=400, prev_sales=400),
            _finished(make_entry, 0.5, model_name="Falling", sales=300, prev_sales=400),
            _finished(make_entry, 0.1, model_name="Rising", sales=500, prev_sales=400),
        ]
        result = apply_radar_filter(entries, RadarFilter())
        assert [e.model_name for e in result] == ["Rising"]
        assert all(e.mom_abs > 0 for e in result)


class TestMinSales:
    def test_threshold_is_inclusive(self, make_entry):
        entries = [
            _finished(make_entry, 0.3, model_name="Below", sales=299, prev_sales=100),
            _finished(make_entry, 0.2, model_name="Exact", sales=300, prev_sales=100),
            _finished(make_entry, 0.1, model_name="Above", sales=301, prev_sales=100),
        ]
        result = apply_radar_filter(entries, RadarFilter(min_sales=300))
        assert [e.model_name for e in result] == ["Exact", "Above"]

    def test_zero_disables_threshold(self, make_entry):
        entries = [_finished(make_entry, 0.1, model_name="Tiny", sales=1, prev_sales=0)]
        assert len(apply_radar_filter(entries, RadarFilter(min_sales=0))) == 1


class TestExcludeNewEntries:
    def test_removes_only_zero_prev_sales(self, make_entry):
        entries = [
            _finished(make_entry, 0.9, model_name="New", sales=900, prev_sales=0),
            _finished(make_entry, 0.5, model_name="Returning", sales=20, prev_sales=1),
        ]
        kept = apply_radar_filter(entries, RadarFilter(exclude_new_entries=True))
        assert [e.model_name for e in kept] == ["Returning"]

        everything = apply_radar_filter(entries, RadarFilter(exclude_new_entries=False))
        assert [e.model_name for e in everything] == ["New", "Returning"]


class TestOrderingAndLimit:
    def test_sorted_by_score_descending(self, make_entry):
        entries = [
            _finished(make_entry, -0.4, model_name="C"),
            _finished(make_entry, 1.2, model_name="A"),
            _finished(make_entry, 0.3, model_name="B"),
        ]
        result = apply_radar_filter(entries, RadarFilter())
        assert [e.model_name for e in result] == ["A", "B", "C"]

    def test_ties_keep_cohort_order(self, make_entry):
        entries = [
            _finished(make_entry, 0.5, model_name="First"),
            _finished(make_entry, 0.7, model_name="Top"),
            _finished(make_entry, 0.5, model_name="Second"),
            _finished(make_entry, 0.5, model_name="Third"),
        ]
        result = apply_radar_filter(entries, RadarFilter())
        assert [e.model_name for e in result] == ["Top", "First", "Second", "Third"]

    def test_limit_applies_after_filtering(self, make_entry):
        entries = [
            _finished(make_entry, 0.9, model_name="HighButFalling", sales=100, prev_sales=200),
            _finished(make_entry, 0.8, model_name="HighButNew", sales=100, prev_sales=0),
            _finished(make_entry, 0.2, model_name="Keep1", sales=300, prev_sales=200),
            _finished(make_entry, 0.1, model_name="Keep2", sales=300, prev_sales=250),
        ]
        result = apply_radar_filter(entries, RadarFilter(exclude_new_entries=True, limit=2))
        assert [e.model_name for e in result] == ["Keep1", "Keep2"]

    @pytest.mark.parametrize("limit", [1, 2, 5])
    def test_output_never_exceeds_limit(self, make_entry, limit):
        entries = [_finished(make_entry, float(i), model_name=f"M{i}") for i in range(4)]
        assert len(apply_radar_filter(entries, RadarFilter(limit=limit))) == min(limit, 4)

    def test_default_limit(self, make_entry):
        entries = [_finished(make_entry, float(i), model_name=f"M{i}") for i in range(DEFAULT_LIMIT + 5)]
        assert len(apply_radar_filter(entries, RadarFilter())) == DEFAULT_LIMIT
