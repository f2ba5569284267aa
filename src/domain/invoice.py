"""Invoice Domain Entity

Tracks customer invoices, their computed totals and the exchange-rate
snapshot frozen at write time.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class DiscountType(str, Enum):
    """Invoice-level discount kinds"""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class Invoice(BaseModel, table=True):
    """
    Invoice - Customer invoice in a chosen currency

    Domain Rules:
    - invoice_number is unique per organization (INV-YYYY-NNNN)
    - discount_amount <= subtotal
    - total = subtotal - discount_amount + tax_amount
    - exchange_rate_to_base and total_in_base_currency are both null or both set
    - Items and totals may only change while status is draft
    - Status changes go through the invoice state machine only
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index("ix_invoices_organization_id", "organization_id"),
        Index("ix_invoices_status", "status"),
        Index("ix_invoices_due_date", "due_date"),
        Index("ix_invoices_org_number", "organization_id", "invoice_number", unique=True),
        CheckConstraint("discount_amount <= subtotal", name="discount_within_subtotal"),
        CheckConstraint("tax_rate >= 0 AND tax_rate <= 100", name="tax_rate_range"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    organization_id: str = Field(
        foreign_key="organizations.id",
        description="Owning organization"
    )

    customer_id: str = Field(
        foreign_key="customers.id",
        description="Billed customer"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Invoice number unique per organization (e.g., INV-2024-0001)"
    )

    currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Invoice currency (ISO 4217)"
    )

    issue_date: date = Field(sa_column=Column(Date, nullable=False))

    due_date: date = Field(sa_column=Column(Date, nullable=False))

    discount_type: Optional[DiscountType] = Field(
        default=None,
        description="Discount kind, None when no discount applies"
    )

    discount_value: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Percentage (0-100) or fixed amount as entered"
    )

    discount_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Discount actually applied, clamped to subtotal"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent (0-100)"
    )

    subtotal: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    tax_amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    total: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    exchange_rate_to_base: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(12, 6), nullable=True),
        description="Rate frozen at write time, None when no rate was on file"
    )

    total_in_base_currency: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="total converted with exchange_rate_to_base"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue, cancelled)"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "9b6f0a52-3f0e-4d8e-9a51-0e4b5f3b6c11",
                "organization_id": "org_acme",
                "customer_id": "cus_123",
                "invoice_number": "INV-2024-0001",
                "currency": "EUR",
                "issue_date": "2024-03-01",
                "due_date": "2024-03-31",
                "discount_type": "percentage",
                "discount_value": "10.00",
                "discount_amount": "10.00",
                "tax_rate": "18.00",
                "subtotal": "100.00",
                "tax_amount": "16.20",
                "total": "106.20",
                "exchange_rate_to_base": "1.085000",
                "total_in_base_currency": "115.23",
                "status": "draft",
                "notes": None,
            }
        }

    @property
    def is_editable(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    @property
    def is_deletable(self) -> bool:
        return self.status in (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED)

    @property
    def accepts_payments(self) -> bool:
        return self.status not in (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED)
