"""Unit tests for AuditService"""

import logging
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.audit_service import AuditService, sanitize_audit_data
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from tests.fixtures.factories import ORG_ID, USER_ID


@pytest.fixture
def audit_repo():
    repo = MagicMock()
    repo.add = AsyncMock()
    return repo


@pytest.fixture
def audit(audit_repo, clock):
    return AuditService(audit_repo, clock)


class TestSanitizeAuditData:

    def test_values_made_json_safe(self):
        data = sanitize_audit_data(
            {
                "total": Decimal("118.00"),
                "due_date": date(2024, 3, 31),
                "status": InvoiceStatus.SENT,
                "notes": None,
                "password": "hunter2",
            }
        )

        assert data == {
            "total": "118.00",
            "due_date": "2024-03-31",
            "status": "sent",
            "password": "[REDACTED]",
        }

    def test_none_passes_through(self):
        assert sanitize_audit_data(None) is None


@pytest.mark.asyncio
class TestAuditService:

    async def test_record_persists_entry(self, audit, audit_repo, clock):
        await audit.record(
            entity_type=AuditEntityType.PAYMENT,
            entity_id="pay_1",
            action=AuditAction.CREATE,
            new_data={"amount": Decimal("10.00")},
            organization_id=ORG_ID,
            actor_id=USER_ID,
        )

        entry = audit_repo.add.call_args.args[0]
        assert entry.entity_type == AuditEntityType.PAYMENT
        assert entry.action == AuditAction.CREATE
        assert entry.new_data == {"amount": "10.00"}
        assert entry.old_data is None
        assert entry.created_at == clock.now()

    async def test_record_failure_is_swallowed_and_logged(self, audit, audit_repo, caplog):
        """
        Given: The audit store rejects the write
        When: An entry is recorded
        Then: No exception reaches the caller; an error is logged
        """
        audit_repo.add = AsyncMock(side_effect=RuntimeError("disk full"))

        with caplog.at_level(logging.ERROR):
            await audit.record(
                entity_type=AuditEntityType.INVOICE,
                entity_id="inv_1",
                action=AuditAction.DELETE,
                organization_id=ORG_ID,
            )

        assert "Failed to record audit log" in caplog.text

    async def test_status_change_records_old_new_and_trigger(self, audit, audit_repo):
        await audit.record_status_change(
            entity_type=AuditEntityType.INVOICE,
            entity_id="inv_1",
            old_status=InvoiceStatus.SENT,
            new_status=InvoiceStatus.OVERDUE,
            organization_id=ORG_ID,
            trigger=TransitionTrigger.OVERDUE_SWEEP,
        )

        entry = audit_repo.add.call_args.args[0]
        assert entry.action == AuditAction.STATUS_CHANGE
        assert entry.old_data == {"status": "sent"}
        assert entry.new_data == {"status": "overdue", "trigger": "overdue_sweep"}
        assert entry.actor_id is None
