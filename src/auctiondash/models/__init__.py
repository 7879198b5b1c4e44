"""Data models for auctiondash."""

from auctiondash.models.property import (
    InvestmentMetrics,
    PropertyDraft,
    PropertyFinancials,
    PropertyRecord,
    PropertyStatus,
    RemodelingCategory,
)

__all__ = [
    "PropertyStatus",
    "RemodelingCategory",
    "PropertyFinancials",
    "InvestmentMetrics",
    "PropertyDraft",
    "PropertyRecord",
]
