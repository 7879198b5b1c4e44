"""Tests for remodeling cost statistics."""

import pytest

from auctiondash.analysis.statistics import (
    aggregate_remodeling_costs,
    budget_comparison,
    category_shares,
)
from auctiondash.models.property import PropertyRecord
from conftest import make_record


def _costs(record_id: str, demolition=0.0, carpentry=0.0, tile=0.0, labor=0.0, **kwargs) -> PropertyRecord:
    return make_record(
        record_id,
        demolition_cost=demolition,
        carpentry_cost=carpentry,
        tile_cost=tile,
        labor_cost=labor,
        **kwargs,
    )


class TestAggregateRemodelingCosts:
    """Test per-category totals."""

    def test_sums_each_category(self):
        records = [
            _costs("a", demolition=5_000_000, carpentry=3_000_000, tile=2_000_000, labor=1_000_000),
            _costs("b", demolition=1_000_000, carpentry=500_000, tile=0, labor=2_000_000),
        ]
        totals = aggregate_remodeling_costs(records)

        assert totals == {
            "demolition": 6_000_000,
            "carpentry": 3_500_000,
            "tile": 2_000_000,
            "labor": 3_000_000,
        }
        assert list(totals) == ["demolition", "carpentry", "tile", "labor"]

    def test_zero_category_excluded(self):
        records = [
            _costs("a", demolition=5_000_000, carpentry=3_000_000),
            _costs("b", tile=1_000_000),
        ]
        totals = aggregate_remodeling_costs(records)

        assert "labor" not in totals
        assert set(totals) == {"demolition", "carpentry", "tile"}

    def test_offsetting_values_excluded(self):
        records = [_costs("a", tile=750_000), _costs("b", tile=-750_000, labor=10)]
        assert aggregate_remodeling_costs(records) == {"labor": 10}

    def test_projected_rows_missing_costs(self):
        records = [PropertyRecord(id="p1", carpentry_cost=None), PropertyRecord(id="p2", carpentry_cost=400)]
        assert aggregate_remodeling_costs(records) == {"carpentry": 400}

    def test_empty(self):
        assert aggregate_remodeling_costs([]) == {}


class TestCategoryShares:
    def test_percentages(self):
        shares = category_shares({"demolition": 750.0, "tile": 250.0})
        assert shares == {"demolition": pytest.approx(75.0), "tile": pytest.approx(25.0)}

    def test_nothing_to_divide(self):
        assert category_shares({}) == {}

    def test_offsetting_totals_share_zero(self):
        shares = category_shares({"demolition": 100.0, "carpentry": -100.0})
        assert shares == {"demolition": 0.0, "carpentry": 0.0}


class TestBudgetComparison:
    """Test planned budget vs recorded total."""

    def test_pairs_planned_and_recorded(self):
        record = _costs("a", demolition=1_000, carpentry=2_000, total_remodeling_cost=3_500)
        [row] = budget_comparison([record])

        assert row.label == "2024타경a"
        assert row.planned == 3_000
        assert row.recorded == 3_500
        assert row.variance == 500

    def test_skips_rows_without_recorded_total(self):
        records = [
            _costs("none", demolition=1_000),
            _costs("zero", demolition=1_000, total_remodeling_cost=0),
            _costs("kept", demolition=1_000, total_remodeling_cost=1_000),
        ]
        assert [row.label for row in budget_comparison(records)] == ["2024타경kept"]

    def test_limit(self):
        records = [_costs(str(i), tile=100, total_remodeling_cost=100) for i in range(15)]
        assert len(budget_comparison(records)) == 10
        assert len(budget_comparison(records, limit=3)) == 3

    def test_address_label_fallback(self):
        record = PropertyRecord(
            id="x",
            address="123 Haeundae-ro, Busan",
            tile_cost=10,
            total_remodeling_cost=10,
        )
        [row] = budget_comparison([record])
        assert row.label == "123 Haeund..."
