"""Request schemas for Payment API"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.payment import PaymentMethod


class PaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /invoices/{invoice_id}/payments endpoint.
    """

    amount: Decimal = Field(..., gt=0, description="Amount in invoice currency (must be > 0)")

    payment_date: date = Field(..., description="Date the money was received")

    method: PaymentMethod = Field(default=PaymentMethod.BANK_TRANSFER)

    reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = Field(default=None, max_length=500)
