"""Audit Log Domain Entity

Append-only record of entity changes and invoice status transitions.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String
from src.domain.base import BaseModel, generate_uuid


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATUS_CHANGE = "status_change"


class AuditEntityType(str, Enum):
    INVOICE = "Invoice"
    PAYMENT = "Payment"
    EXCHANGE_RATE = "ExchangeRate"
    ORGANIZATION = "Organization"


class AuditLog(BaseModel, table=True):
    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
        Index("ix_audit_logs_organization_id", "organization_id"),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    entity_type: AuditEntityType
    entity_id: str = Field(sa_column=Column(String(36), nullable=False))
    action: AuditAction
    organization_id: Optional[str] = Field(default=None)
    # None when the change was made by a scheduled job
    actor_id: Optional[str] = Field(default=None)
    old_data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    new_data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
