"""Payment Domain Entity

Organization-scoped payment records referencing an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class PaymentMethod(str, Enum):
    """How a payment was received"""
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    CHECK = "check"
    OTHER = "other"


class Payment(BaseModel, table=True):
    """
    Payment - Money received against an invoice

    Domain Rules:
    - amount > 0
    - Created and deleted independently of invoice edits, never mutated
    - Not cascaded with the invoice; references it by id
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="payment_amount_positive"),
        Index("ix_payments_invoice_id", "invoice_id"),
        Index("ix_payments_organization_id", "organization_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_id: str = Field(foreign_key="invoices.id")

    organization_id: str = Field(foreign_key="organizations.id")

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount received in invoice currency"
    )

    payment_date: date = Field(sa_column=Column(Date, nullable=False))

    method: PaymentMethod = Field(default=PaymentMethod.BANK_TRANSFER)

    reference: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
