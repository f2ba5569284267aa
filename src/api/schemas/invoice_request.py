"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from fastapi import Query
from pydantic import BaseModel, Field, field_validator
from src.app.repositories.invoice_repository import InvoiceFilters
from src.domain.invoice import DiscountType, InvoiceStatus


class InvoiceItemRequestSchema(BaseModel):
    description: str = Field(..., description="Item description")
    quantity: Decimal = Field(..., description="Quantity (> 0)")
    unit_price: Decimal = Field(..., description="Price per unit (>= 0)")


class InvoiceRequestSchema(BaseModel):
    """
    Request schema for creating or editing an invoice

    Used for POST /organizations/{organization_id}/invoices and PUT /invoices/{invoice_id}.
    Range checks on items, tax and discount are reported field by field by
    the totals calculator.
    """

    customer_id: str = Field(..., min_length=1, description="Customer in the same organization")

    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code")

    issue_date: date

    due_date: date

    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax rate in percent")

    discount_type: Optional[DiscountType] = None

    discount_value: Optional[Decimal] = None

    notes: Optional[str] = Field(default=None, max_length=1000)

    items: List[InvoiceItemRequestSchema] = Field(default_factory=list)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if not v.isalpha():
            raise ValueError("currency must be a 3-letter code")
        return v.upper()


class InvoiceStatusRequestSchema(BaseModel):
    status: InvoiceStatus = Field(..., description="Target status (sent or cancelled)")


def invoice_filters(
    status: Optional[InvoiceStatus] = Query(default=None),
    customer_id: Optional[str] = Query(default=None),
    date_from: Optional[date] = Query(default=None, description="Issue date, inclusive"),
    date_to: Optional[date] = Query(default=None, description="Issue date, inclusive"),
) -> InvoiceFilters:
    return InvoiceFilters(
        date_from=date_from,
        date_to=date_to,
        customer_id=customer_id,
        status=status,
    )
