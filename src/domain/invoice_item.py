"""Invoice Item Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class InvoiceItem(BaseModel, table=True):
    """
    Invoice Item - Individual line item within an invoice

    Domain Rules:
    - Each item belongs to exactly one invoice
    - total = round2(quantity * unit_price)
    - Replaced wholesale (never diffed) when a draft invoice is edited
    - Immutable once the invoice leaves draft
    """

    __tablename__ = "invoice_items"
    __table_args__ = (
        Index("ix_invoice_items_invoice_id", "invoice_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Zero-based order of the item on the invoice"
    )

    description: str = Field(sa_column=Column(String(500), nullable=False))

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Quantity (> 0, <= 999,999)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Price per unit (>= 0)"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="quantity * unit_price rounded to 2 decimals"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
