"""Remodeling cost statistics for the statistics page.

Aggregates the four remodeling sub-costs across all properties and
compares each property's planned budget with the total it was saved with.
"""

from dataclasses import dataclass

from ..models.property import PropertyRecord, RemodelingCategory
from .calculator import total_remodeling_cost

# Rows shown in the planned-vs-recorded chart
DEFAULT_COMPARISON_LIMIT = 10

# Columns the statistics views need from the store
STATISTICS_FIELDS = [
    "case_number",
    "address",
    *(category.field_name for category in RemodelingCategory),
    "total_remodeling_cost",
]


@dataclass(frozen=True)
class BudgetComparison:
    """Planned remodeling budget vs. the stored total for one property."""

    label: str
    planned: float
    recorded: float

    @property
    def variance(self) -> float:
        return self.recorded - self.planned


def aggregate_remodeling_costs(records: list[PropertyRecord]) -> dict[str, float]:
    """Total each remodeling category across all records.

    Args:
        records: Property records (projected rows are fine; missing costs read as 0)

    Returns:
        Mapping of category label to total, in category order. Categories
        whose total is exactly zero are omitted.
    """
    totals = {category.value: 0.0 for category in RemodelingCategory}

    for record in records:
        financials = record.financials
        for category in RemodelingCategory:
            totals[category.value] += getattr(financials, category.field_name)

    return {label: value for label, value in totals.items() if value != 0}


def category_shares(totals: dict[str, float]) -> dict[str, float]:
    """Percentage share of each category in the grand total.

    Every category gets a share. When the totals cancel out to zero
    there is nothing to divide and each share is 0.
    """
    grand_total = sum(totals.values())
    if grand_total == 0:
        return {label: 0.0 for label in totals}
    return {label: value / grand_total * 100 for label, value in totals.items()}


def budget_comparison(
    records: list[PropertyRecord],
    limit: int = DEFAULT_COMPARISON_LIMIT,
) -> list[BudgetComparison]:
    """Compare planned budgets with stored remodeling totals.

    Works on rows as loaded from the store, before the derived cache is
    refreshed: ``recorded`` is the persisted ``total_remodeling_cost``
    and ``planned`` is the sum of the sub-costs. Only rows with a
    positive recorded total are included.

    Args:
        records: Raw property rows
        limit: Maximum number of rows (default 10)

    Returns:
        List of BudgetComparison in input order
    """
    rows = []
    for record in records:
        recorded = record.total_remodeling_cost or 0.0
        if recorded <= 0:
            continue
        rows.append(
            BudgetComparison(
                label=record.label,
                planned=total_remodeling_cost(record),
                recorded=recorded,
            )
        )
    return rows[:limit]
