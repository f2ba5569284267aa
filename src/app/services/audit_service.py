"""Audit Service

Records entity changes and status transitions. Recording never raises:
a failed audit write is logged and the primary operation continues.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from src.app.repositories.audit_log_repository import AuditLogRepository
from src.app.services.clock import Clock
from src.domain.audit_log import AuditLog, AuditAction, AuditEntityType

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {"password", "token", "secret", "access_token", "refresh_token"}


def sanitize_audit_data(data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Make audit payloads JSON-safe and drop sensitive values"""
    if data is None:
        return None

    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key.lower() in SENSITIVE_FIELDS:
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, Decimal):
            sanitized[key] = str(value)
        elif isinstance(value, (datetime, date)):
            sanitized[key] = value.isoformat()
        elif isinstance(value, Enum):
            sanitized[key] = value.value
        else:
            sanitized[key] = value
    return sanitized


class AuditService:

    def __init__(self, audit_repo: AuditLogRepository, clock: Clock):
        self.audit_repo = audit_repo
        self.clock = clock

    async def record(
        self,
        entity_type: AuditEntityType,
        entity_id: str,
        action: AuditAction,
        old_data: Optional[Dict[str, Any]] = None,
        new_data: Optional[Dict[str, Any]] = None,
        organization_id: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> None:
        """
        Record an audit entry

        Args:
            entity_type: Kind of entity changed
            entity_id: Entity identifier
            action: CREATE, UPDATE, DELETE or STATUS_CHANGE
            old_data: State before the change
            new_data: State after the change
            organization_id: Owning organization
            actor_id: User that made the change, None for scheduled jobs
        """
        try:
            entry = AuditLog(
                entity_type=entity_type,
                entity_id=entity_id,
                action=action,
                organization_id=organization_id,
                actor_id=actor_id,
                old_data=sanitize_audit_data(old_data),
                new_data=sanitize_audit_data(new_data),
                created_at=self.clock.now(),
            )
            await self.audit_repo.add(entry)
            logger.debug(
                f"Audit log recorded: {action.value} {entity_type.value} {entity_id} "
                f"(actor={actor_id})"
            )
        except Exception as e:
            logger.error(
                f"Failed to record audit log: {action.value} {entity_type.value} "
                f"{entity_id} (organization={organization_id}): {e}"
            )

    async def record_status_change(
        self,
        entity_type: AuditEntityType,
        entity_id: str,
        old_status: Enum,
        new_status: Enum,
        organization_id: Optional[str] = None,
        actor_id: Optional[str] = None,
        trigger: Optional[Enum] = None,
    ) -> None:
        new_data: Dict[str, Any] = {"status": new_status}
        if trigger is not None:
            new_data["trigger"] = trigger
        await self.record(
            entity_type=entity_type,
            entity_id=entity_id,
            action=AuditAction.STATUS_CHANGE,
            old_data={"status": old_status},
            new_data=new_data,
            organization_id=organization_id,
            actor_id=actor_id,
        )
