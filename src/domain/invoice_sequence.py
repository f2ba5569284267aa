"""Invoice Sequence Domain Entity

Per-organization, per-year counter backing invoice numbers.
"""

from sqlmodel import Field, Index
from src.domain.base import BaseModel, generate_uuid


class InvoiceSequence(BaseModel, table=True):
    __tablename__ = "invoice_sequences"
    __table_args__ = (
        Index("ix_invoice_sequences_org_year", "organization_id", "year", unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id")
    year: int
    last_value: int = Field(default=0)


def format_invoice_number(year: int, sequence: int) -> str:
    """INV-{year}-{4-digit sequence}"""
    return f"INV-{year}-{sequence:04d}"
