"""Investment and profitability calculator for auction properties.

Converts the raw cost fields entered at registration into remodeling
total, acquisition tax, total investment, net profit and ROI. Every view
(registration preview, property table, statistics, CLI reports) goes
through ``calculate_metrics`` so the figures never drift between pages.

The functions here are pure: no I/O, no shared state, and no exceptions
for any finite input, negative values included.
"""

import logging
from collections.abc import Mapping
from typing import Any, Union

from ..models.property import (
    DERIVED_FIELDS,
    FINANCIAL_FIELDS,
    InvestmentMetrics,
    PropertyFinancials,
    PropertyRecord,
)

logger = logging.getLogger(__name__)

FinancialsLike = Union[PropertyFinancials, Mapping[str, Any], Any]


def _as_financials(source: FinancialsLike) -> PropertyFinancials:
    """Normalize calculator input to PropertyFinancials.

    Accepts the model itself, anything exposing ``.financials`` (drafts,
    records), or a plain mapping of raw fields. Missing keys read as zero.
    """
    if isinstance(source, PropertyFinancials):
        return source
    if isinstance(source, Mapping):
        return PropertyFinancials(
            **{name: source.get(name) for name in FINANCIAL_FIELDS}
        )
    return source.financials


def total_remodeling_cost(financials: FinancialsLike) -> float:
    """Sum the four remodeling sub-costs.

    Total = Demolition + Carpentry + Tile + Labor
    """
    f = _as_financials(financials)
    return f.demolition_cost + f.carpentry_cost + f.tile_cost + f.labor_cost


def acquisition_tax(total_investment: float, rate: float) -> float:
    """Calculate acquisition tax on the total investment.

    Tax = Total Investment × Rate / 100

    Args:
        total_investment: Purchase price plus remodeling total
        rate: Tax rate as a percentage (e.g., 1.1 for 1.1%)

    Returns:
        Acquisition tax amount
    """
    return total_investment * rate / 100


def return_on_investment(net_profit: float, total_investment_with_tax: float) -> float:
    """Calculate ROI percentage.

    ROI = (Net Profit / Total Investment incl. tax) × 100

    A zero (or negative) investment base yields 0.0 rather than
    dividing by zero.

    Returns:
        ROI as percentage (e.g., 8.3 for 8.3%), sign preserved
    """
    if total_investment_with_tax <= 0:
        return 0.0
    return (net_profit / total_investment_with_tax) * 100


def calculate_metrics(financials: FinancialsLike) -> InvestmentMetrics:
    """Derive all profitability metrics from raw property fields.

    Example:
        metrics = calculate_metrics(
            PropertyFinancials(purchase_price=400_000_000, acquisition_tax_rate=1.1)
        )
        print(f"ROI: {metrics.roi:.2f}%")

    Args:
        financials: PropertyFinancials, a draft/record, or a raw field mapping

    Returns:
        InvestmentMetrics with the six derived values
    """
    f = _as_financials(financials)

    remodeling = total_remodeling_cost(f)
    investment = f.purchase_price + remodeling
    tax = acquisition_tax(investment, f.acquisition_tax_rate)
    investment_with_tax = investment + tax
    net_profit = f.expected_sale_price - investment_with_tax

    return InvestmentMetrics(
        total_remodeling_cost=remodeling,
        total_investment=investment,
        acquisition_tax=tax,
        total_investment_with_tax=investment_with_tax,
        net_profit=net_profit,
        roi=return_on_investment(net_profit, investment_with_tax),
    )


def derived_columns(financials: FinancialsLike) -> dict[str, float]:
    """Derived values keyed by their storage column names."""
    return calculate_metrics(financials).model_dump(include=set(DERIVED_FIELDS))


def refresh_derived(record: PropertyRecord) -> PropertyRecord:
    """Overwrite a record's cached derived columns with fresh values.

    Stored derived columns are only a cache of the raw fields. Stale or
    missing values are replaced, never trusted.
    """
    fresh = derived_columns(record)
    stale = [
        name
        for name, value in fresh.items()
        if getattr(record, name) is not None and getattr(record, name) != value
    ]
    if stale:
        logger.debug(f"Record {record.id}: recomputed stale columns {', '.join(stale)}")
    return record.model_copy(update=fresh)
