"""Data Transfer Objects for Payment Use Cases"""

from datetime import datetime, date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.money import PAYMENT_TOLERANCE, ZERO, round2
from src.domain.payment import Payment, PaymentMethod


class CreatePaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment against an invoice

    Used as input to CreatePayment use case.
    """

    invoice_id: str = Field(..., description="Invoice being paid")

    amount: Decimal = Field(..., description="Amount in invoice currency (must be > 0)")

    payment_date: date = Field(..., description="Date the money was received")

    method: PaymentMethod = Field(default=PaymentMethod.BANK_TRANSFER)

    reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = Field(default=None, max_length=500)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "inv_123",
                "amount": "118.00",
                "payment_date": "2024-03-15",
                "method": "bank_transfer",
                "reference": "TRX-0042",
            }
        }


class PaymentResponseDTO(BaseModel):
    payment_id: str
    invoice_id: str
    organization_id: str
    amount: Decimal
    payment_date: date
    method: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponseDTO":
        return cls(
            payment_id=payment.id,
            invoice_id=payment.invoice_id,
            organization_id=payment.organization_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
            method=payment.method.value,
            reference=payment.reference,
            notes=payment.notes,
            created_at=payment.created_at,
        )


class PaymentSummaryDTO(BaseModel):
    """
    Read-only payment totals for an invoice

    is_fully_paid uses the same 0.01 tolerance as reconciliation.
    """

    invoice_id: str
    invoice_total: Decimal
    total_paid: Decimal
    remaining_amount: Decimal
    payment_count: int
    is_fully_paid: bool

    @classmethod
    def from_payments(
        cls, invoice_id: str, invoice_total: Decimal, payments: List[Payment]
    ) -> "PaymentSummaryDTO":
        total_paid = round2(sum((p.amount for p in payments), ZERO))
        remaining = max(ZERO, round2(invoice_total - total_paid))
        return cls(
            invoice_id=invoice_id,
            invoice_total=invoice_total,
            total_paid=total_paid,
            remaining_amount=remaining,
            payment_count=len(payments),
            is_fully_paid=remaining < PAYMENT_TOLERANCE,
        )


class CreatePaymentResponseDTO(BaseModel):
    """Payment plus the invoice status after reconciliation"""

    payment: PaymentResponseDTO
    invoice_status: str
    summary: PaymentSummaryDTO


class DeletePaymentResponseDTO(BaseModel):
    payment_id: str
    invoice_id: str
    invoice_status: str
    summary: PaymentSummaryDTO
    deleted: bool = True


class PaymentListResponseDTO(BaseModel):
    invoice_id: str
    payments: List[PaymentResponseDTO]
    summary: PaymentSummaryDTO
