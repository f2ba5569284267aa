"""Data Transfer Objects for Exchange Rate Use Cases"""

from datetime import datetime, date
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field
from src.domain.exchange_rate import ExchangeRate


class UpsertExchangeRateCommandDTO(BaseModel):
    """
    Command DTO for entering today's rate of a currency

    The rate converts one unit of from_currency into the organization's
    base currency.
    """

    organization_id: str = Field(..., description="Organization identifier")

    from_currency: str = Field(..., min_length=3, max_length=3, description="Source currency (ISO 4217)")

    rate: Decimal = Field(..., description="Base currency units per one from_currency (> 0)")

    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": "org_acme",
                "from_currency": "EUR",
                "rate": "1.085",
            }
        }


class ExchangeRateResponseDTO(BaseModel):
    exchange_rate_id: str
    organization_id: str
    from_currency: str
    to_currency: str
    rate: Decimal
    effective_date: date
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, exchange_rate: ExchangeRate) -> "ExchangeRateResponseDTO":
        return cls(
            exchange_rate_id=exchange_rate.id,
            organization_id=exchange_rate.organization_id,
            from_currency=exchange_rate.from_currency,
            to_currency=exchange_rate.to_currency,
            rate=exchange_rate.rate,
            effective_date=exchange_rate.effective_date,
            created_at=exchange_rate.created_at,
            updated_at=exchange_rate.updated_at,
        )


class ExchangeRateListResponseDTO(BaseModel):
    base_currency: str
    rates: List[ExchangeRateResponseDTO]


class DeleteExchangeRateResponseDTO(BaseModel):
    exchange_rate_id: str
    deleted: bool = True
