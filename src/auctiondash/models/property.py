"""Property and investment data models."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

# UI hint range for the acquisition tax rate input (percent). Not enforced.
ACQUISITION_TAX_RATE_MIN = 1.1
ACQUISITION_TAX_RATE_MAX = 12.4

FINANCIAL_FIELDS = (
    "appraisal_price",
    "minimum_price",
    "purchase_price",
    "demolition_cost",
    "carpentry_cost",
    "tile_cost",
    "labor_cost",
    "acquisition_tax_rate",
    "expected_sale_price",
)

DERIVED_FIELDS = (
    "total_remodeling_cost",
    "total_investment",
    "acquisition_tax",
    "total_investment_with_tax",
    "net_profit",
    "roi",
)


def _zero_if_missing(value: Any) -> Any:
    """Treat None and blank form input as zero."""
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    return value


class PropertyStatus(str, Enum):
    """Lifecycle of an auction property."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        return self in (PropertyStatus.UPCOMING, PropertyStatus.ONGOING)


class RemodelingCategory(str, Enum):
    """Remodeling sub-cost categories, keyed to their cost column."""

    DEMOLITION = "demolition"
    CARPENTRY = "carpentry"
    TILE = "tile"
    LABOR = "labor"

    @property
    def field_name(self) -> str:
        return f"{self.value}_cost"


class PropertyFinancials(BaseModel):
    """Raw cost and price inputs of a property.

    Every field defaults to zero and absent/blank values read as zero.
    Negative values are accepted; the form only hints against them.
    """

    appraisal_price: float = 0.0
    minimum_price: float = 0.0
    purchase_price: float = 0.0
    demolition_cost: float = 0.0
    carpentry_cost: float = 0.0
    tile_cost: float = 0.0
    labor_cost: float = 0.0
    acquisition_tax_rate: float = Field(
        default=0.0, description="Percent, e.g. 1.1 for 1.1%"
    )
    expected_sale_price: float = 0.0

    model_config = {"frozen": True}

    @field_validator(*FINANCIAL_FIELDS, mode="before")
    @classmethod
    def coerce_missing(cls, v: Any) -> Any:
        return _zero_if_missing(v)


class InvestmentMetrics(BaseModel):
    """Derived profitability figures for one property.

    Always recomputable from PropertyFinancials; never ground truth.
    """

    total_remodeling_cost: float
    total_investment: float
    acquisition_tax: float
    total_investment_with_tax: float
    net_profit: float
    roi: float = Field(..., description="net_profit / total_investment_with_tax * 100")

    model_config = {"frozen": True}

    @property
    def is_profitable(self) -> bool:
        return self.net_profit > 0


class PropertyDraft(BaseModel):
    """Registration form payload for a new auction property."""

    case_number: str = Field(..., min_length=1, description="Court case number, e.g. 2024타경12345")
    address: str = Field(..., min_length=1, description="Property address")
    property_name: str | None = Field(default=None, description="Optional display name")

    appraisal_price: float = Field(..., ge=0, description="Court appraisal")
    minimum_price: float = Field(..., ge=0, description="Minimum bid price")
    purchase_price: float = 0.0

    demolition_cost: float = 0.0
    carpentry_cost: float = 0.0
    tile_cost: float = 0.0
    labor_cost: float = 0.0

    acquisition_tax_rate: float = 0.0
    expected_sale_price: float = 0.0

    auction_date: date | None = None
    vacate_date: date | None = None
    construction_start_date: date | None = None

    status: PropertyStatus = PropertyStatus.UPCOMING
    notes: str | None = None

    model_config = {
        "str_strip_whitespace": True,
    }

    @field_validator(
        "purchase_price",
        "demolition_cost",
        "carpentry_cost",
        "tile_cost",
        "labor_cost",
        "acquisition_tax_rate",
        "expected_sale_price",
        mode="before",
    )
    @classmethod
    def coerce_missing(cls, v: Any) -> Any:
        return _zero_if_missing(v)

    @field_validator("auction_date", "vacate_date", "construction_start_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def financials(self) -> PropertyFinancials:
        return PropertyFinancials(**self.model_dump(include=set(FINANCIAL_FIELDS)))


class PropertyRecord(BaseModel):
    """A property row as stored by the record store.

    Rows may be projected to a subset of columns, so everything except
    ``id`` has a default. The derived columns are a cache written on
    insert; use calculator.calculate_metrics (or refresh_derived) for values
    that are guaranteed consistent with the raw fields.
    """

    id: str

    case_number: str = ""
    address: str = ""
    property_name: str | None = None

    appraisal_price: float = 0.0
    minimum_price: float = 0.0
    purchase_price: float = 0.0
    demolition_cost: float = 0.0
    carpentry_cost: float = 0.0
    tile_cost: float = 0.0
    labor_cost: float = 0.0
    acquisition_tax_rate: float = 0.0
    expected_sale_price: float = 0.0

    # Cached derived columns
    total_remodeling_cost: Optional[float] = None
    total_investment: Optional[float] = None
    acquisition_tax: Optional[float] = None
    total_investment_with_tax: Optional[float] = None
    net_profit: Optional[float] = None
    roi: Optional[float] = None

    auction_date: date | None = None
    vacate_date: date | None = None
    construction_start_date: date | None = None

    status: PropertyStatus = PropertyStatus.UPCOMING
    notes: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> Any:
        # Backends may hand out integer or UUID keys
        return v if isinstance(v, str) else str(v)

    @field_validator(*FINANCIAL_FIELDS, mode="before")
    @classmethod
    def coerce_missing(cls, v: Any) -> Any:
        return _zero_if_missing(v)

    @field_validator(*DERIVED_FIELDS, mode="before")
    @classmethod
    def blank_cache_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def financials(self) -> PropertyFinancials:
        return PropertyFinancials(**self.model_dump(include=set(FINANCIAL_FIELDS)))

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def label(self) -> str:
        """Short display label: case number, else truncated address."""
        if self.case_number:
            return self.case_number
        if len(self.address) > 10:
            return self.address[:10] + "..."
        return self.address
