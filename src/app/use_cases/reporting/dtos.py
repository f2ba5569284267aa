"""Data Transfer Objects for Reporting Use Cases"""

from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class InvoiceStatsResponseDTO(BaseModel):
    """
    Invoice counts and money totals for an organization

    Base-currency totals only include invoices with a frozen snapshot or in
    the base currency; other currencies are listed in missing_historical_rates.
    """

    organization_id: str
    base_currency: str
    total_count: int
    draft_count: int
    sent_count: int
    paid_count: int
    overdue_count: int
    cancelled_count: int
    revenue_by_currency: Dict[str, Decimal] = Field(default_factory=dict)
    outstanding_by_currency: Dict[str, Decimal] = Field(default_factory=dict)
    revenue_in_base_currency: Decimal
    outstanding_in_base_currency: Decimal
    missing_historical_rates: List[str] = Field(default_factory=list)


class RevenueBucketDTO(BaseModel):
    period: str = Field(..., description="YYYY-MM for monthly buckets, YYYY for yearly")
    year: int
    month: Optional[int] = None
    revenue: Decimal
    outstanding: Decimal
    invoice_count: int
    missing_rate_count: int = Field(
        default=0, description="Invoices in this bucket left out of the base-currency sums"
    )


class RevenueStatsResponseDTO(BaseModel):
    organization_id: str
    base_currency: str
    granularity: str
    buckets: List[RevenueBucketDTO]
    total_revenue: Decimal
    total_outstanding: Decimal
    missing_historical_rates: List[str] = Field(default_factory=list)
