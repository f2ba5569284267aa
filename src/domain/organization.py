"""Organization Domain Entity

Tenant boundary for invoices, payments and exchange rates.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Organization(BaseModel, table=True):
    """
    Organization - Billing tenant

    Domain Rules:
    - base_currency is an ISO 4217 code, mutable by admins
    - All cross-currency reporting is normalized to base_currency
    """

    __tablename__ = "organizations"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Organization identifier (UUID)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name"
    )

    base_currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Reporting currency (ISO 4217)"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
