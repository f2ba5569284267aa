"""Exchange Rate Domain Entity

Manually entered conversion rates, one row per currency pair per day.
"""

from datetime import datetime, date
from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class ExchangeRate(BaseModel, table=True):
    """
    Exchange Rate - Conversion from a currency to the organization base currency

    Domain Rules:
    - Append-only history keyed by (organization, from, to, effective_date)
    - Re-submitting on the same day updates that day's row
    - The current rate is the row with the latest effective_date
    - The base currency itself is implicitly 1 and never stored
    """

    __tablename__ = "exchange_rates"
    __table_args__ = (
        CheckConstraint("rate > 0", name="exchange_rate_positive"),
        Index(
            "ix_exchange_rates_pair_day",
            "organization_id", "from_currency", "to_currency", "effective_date",
            unique=True,
        ),
        Index("ix_exchange_rates_organization_id", "organization_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    organization_id: str = Field(foreign_key="organizations.id")

    from_currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Source currency (ISO 4217)"
    )

    to_currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Organization base currency at entry time"
    )

    rate: Decimal = Field(
        sa_column=Column(Numeric(12, 6), nullable=False),
        description="Units of to_currency per one from_currency"
    )

    effective_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Day the rate applies from (date only)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
