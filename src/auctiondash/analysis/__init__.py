"""Investment analysis modules for auction properties.

This package provides the profitability calculator, property ranking,
and remodeling cost statistics.
"""

from .calculator import calculate_metrics, refresh_derived
from .ranker import PortfolioSummary, PropertyRanker
from .statistics import BudgetComparison, aggregate_remodeling_costs, budget_comparison

__all__ = [
    "calculate_metrics",
    "refresh_derived",
    "PropertyRanker",
    "PortfolioSummary",
    "aggregate_remodeling_costs",
    "budget_comparison",
    "BudgetComparison",
]
