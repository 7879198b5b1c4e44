"""Pytest fixtures and test utilities."""

from datetime import datetime, timezone

import pytest

from auctiondash.analysis import PropertyRanker
from auctiondash.models.property import PropertyFinancials, PropertyRecord, PropertyStatus
from auctiondash.storage import SQLiteStore


@pytest.fixture
def ranker() -> PropertyRanker:
    """PropertyRanker instance."""
    return PropertyRanker()


@pytest.fixture
def scenario_a() -> PropertyFinancials:
    """Profitable flip: 400M purchase, 11M remodeling, 1.1% tax, 450M sale."""
    return PropertyFinancials(
        appraisal_price=500_000_000,
        minimum_price=350_000_000,
        purchase_price=400_000_000,
        demolition_cost=5_000_000,
        carpentry_cost=3_000_000,
        tile_cost=2_000_000,
        labor_cost=1_000_000,
        acquisition_tax_rate=1.1,
        expected_sale_price=450_000_000,
    )


@pytest.fixture
def loss_scenario(scenario_a: PropertyFinancials) -> PropertyFinancials:
    """Scenario A with the sale price dropped to 300M."""
    return scenario_a.model_copy(update={"expected_sale_price": 300_000_000})


def make_record(
    record_id: str,
    purchase_price: float = 100.0,
    expected_sale_price: float = 110.0,
    created_at: datetime | None = None,
    status: PropertyStatus = PropertyStatus.UPCOMING,
    **kwargs,
) -> PropertyRecord:
    """Build a record with zero tax so ROI is easy to reason about."""
    return PropertyRecord(
        id=record_id,
        case_number=f"2024타경{record_id}",
        address=f"{record_id} Teheran-ro, Gangnam-gu, Seoul",
        purchase_price=purchase_price,
        expected_sale_price=expected_sale_price,
        created_at=created_at,
        status=status,
        **kwargs,
    )


@pytest.fixture
def roi_records() -> list[PropertyRecord]:
    """Three records with ROI 10%, 25%, 25% in that order."""
    return [
        make_record("1001", expected_sale_price=110.0),
        make_record("1002", expected_sale_price=125.0),
        make_record("1003", expected_sale_price=125.0),
    ]


@pytest.fixture
def dated_records() -> list[PropertyRecord]:
    """Records created on different days, listed oldest first."""
    return [
        make_record(
            "2001",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            status=PropertyStatus.COMPLETED,
        ),
        make_record(
            "2002",
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
            status=PropertyStatus.ONGOING,
        ),
        make_record(
            "2003",
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def sqlite_store(tmp_path) -> SQLiteStore:
    """SQLite store in a temporary directory."""
    return SQLiteStore(data_dir=tmp_path)
