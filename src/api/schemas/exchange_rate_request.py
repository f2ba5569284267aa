"""Request schemas for Exchange Rate API"""

from decimal import Decimal
from pydantic import BaseModel, Field, field_validator


class ExchangeRateRequestSchema(BaseModel):
    """
    Request schema for entering today's rate

    Used for PUT /organizations/{organization_id}/exchange-rates endpoint.
    """

    from_currency: str = Field(..., min_length=3, max_length=3)

    rate: Decimal = Field(..., gt=0, description="Base currency units per one from_currency")

    @field_validator("from_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if not v.isalpha():
            raise ValueError("from_currency must be a 3-letter code")
        return v.upper()
