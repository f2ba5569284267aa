"""Customer Domain Entity

Billed party. Only the fields the invoice engine needs are modeled here.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Customer(BaseModel, table=True):
    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customers_organization_id", "organization_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id")
    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
