"""Tests for the investment calculator."""

import math

import pytest

from auctiondash.analysis.calculator import (
    acquisition_tax,
    calculate_metrics,
    derived_columns,
    refresh_derived,
    return_on_investment,
    total_remodeling_cost,
)
from auctiondash.models.property import DERIVED_FIELDS, PropertyFinancials, PropertyRecord


class TestScenarioA:
    """Worked example: profitable flip."""

    def test_remodeling_and_investment(self, scenario_a: PropertyFinancials):
        metrics = calculate_metrics(scenario_a)
        assert metrics.total_remodeling_cost == 11_000_000
        assert metrics.total_investment == 411_000_000

    def test_tax_and_totals(self, scenario_a: PropertyFinancials):
        metrics = calculate_metrics(scenario_a)
        assert metrics.acquisition_tax == pytest.approx(4_521_000)
        assert metrics.total_investment_with_tax == pytest.approx(415_521_000)
        assert metrics.net_profit == pytest.approx(34_479_000)

    def test_roi(self, scenario_a: PropertyFinancials):
        # 34,479,000 / 415,521,000 * 100
        metrics = calculate_metrics(scenario_a)
        assert metrics.roi == pytest.approx(8.2978, abs=1e-4)
        assert metrics.is_profitable


class TestLossScenario:
    """Sale price below total investment."""

    def test_negative_profit_preserved(self, loss_scenario: PropertyFinancials):
        metrics = calculate_metrics(loss_scenario)
        assert metrics.net_profit == pytest.approx(-115_521_000)
        assert metrics.net_profit < 0
        assert not metrics.is_profitable

    def test_roi_matches_formula_exactly(self, loss_scenario: PropertyFinancials):
        metrics = calculate_metrics(loss_scenario)
        assert metrics.roi < 0
        assert metrics.roi == metrics.net_profit / metrics.total_investment_with_tax * 100


class TestZeroDivisionGuard:
    """ROI is 0 when there is nothing invested."""

    @pytest.mark.parametrize("rate", [0.0, 1.1, 4.6, 12.4, 100.0])
    def test_zero_investment_roi_is_zero(self, rate: float):
        metrics = calculate_metrics(
            PropertyFinancials(acquisition_tax_rate=rate, expected_sale_price=50_000_000)
        )
        assert metrics.total_investment_with_tax == 0
        assert metrics.roi == 0
        assert not math.isnan(metrics.roi)

    def test_negative_base_roi_is_zero(self):
        assert return_on_investment(1_000, -500) == 0.0

    def test_all_defaults(self):
        metrics = calculate_metrics(PropertyFinancials())
        assert metrics.model_dump() == {name: 0.0 for name in DERIVED_FIELDS}


class TestDeterminism:
    """Same inputs, same bits."""

    def test_repeat_calls_identical(self, scenario_a: PropertyFinancials):
        a = calculate_metrics(scenario_a)
        b = calculate_metrics(scenario_a)
        assert a == b

    def test_model_mapping_and_record_agree(self, scenario_a: PropertyFinancials):
        from_model = calculate_metrics(scenario_a)
        from_mapping = calculate_metrics(scenario_a.model_dump())
        from_record = calculate_metrics(PropertyRecord(id="x", **scenario_a.model_dump()))
        assert from_model == from_mapping == from_record


class TestComponents:
    """Individual formula pieces."""

    def test_remodeling_additivity_with_negatives(self):
        f = PropertyFinancials(
            demolition_cost=5_000_000,
            carpentry_cost=-2_000_000,
            tile_cost=750_000,
            labor_cost=-250_000,
        )
        assert total_remodeling_cost(f) == 5_000_000 + -2_000_000 + 750_000 + -250_000

    def test_tax_rate_is_percent(self):
        assert acquisition_tax(100_000_000, 4.6) == pytest.approx(4_600_000)

    def test_missing_mapping_keys_read_as_zero(self):
        metrics = calculate_metrics({"purchase_price": 200_000_000, "tile_cost": None})
        assert metrics.total_investment == 200_000_000
        assert metrics.total_remodeling_cost == 0

    def test_negative_inputs_never_raise(self):
        metrics = calculate_metrics(
            PropertyFinancials(purchase_price=-10, expected_sale_price=-20, acquisition_tax_rate=-5)
        )
        assert metrics.roi == 0.0


class TestDerivedCache:
    """Stored derived columns are overwritten on read."""

    def test_derived_columns_keys(self, scenario_a: PropertyFinancials):
        columns = derived_columns(scenario_a)
        assert set(columns) == set(DERIVED_FIELDS)
        assert columns["total_investment"] == 411_000_000

    def test_stale_values_replaced(self, scenario_a: PropertyFinancials):
        record = PropertyRecord(
            id="stale",
            **scenario_a.model_dump(),
            total_investment=1.0,
            roi=99.0,
        )
        refreshed = refresh_derived(record)
        assert refreshed.total_investment == 411_000_000
        assert refreshed.roi == calculate_metrics(scenario_a).roi
        # Original untouched
        assert record.roi == 99.0

    def test_missing_values_filled(self, scenario_a: PropertyFinancials):
        record = PropertyRecord(id="bare", **scenario_a.model_dump())
        refreshed = refresh_derived(record)
        for name, value in derived_columns(scenario_a).items():
            assert getattr(refreshed, name) == value
