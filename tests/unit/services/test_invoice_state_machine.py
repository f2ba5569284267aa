"""Unit tests for InvoiceStateMachine"""

import pytest
from datetime import date, datetime

from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.domain.audit_log import AuditEntityType
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from tests.fixtures.factories import ORG_ID, USER_ID, make_invoice


@pytest.fixture
def state_machine(mock_invoice_repo, mock_audit, clock):
    return InvoiceStateMachine(mock_invoice_repo, mock_audit, clock)


@pytest.mark.asyncio
class TestTransition:

    async def test_legal_transition_updates_and_audits(
        self, state_machine, mock_invoice_repo, mock_audit, clock
    ):
        invoice = make_invoice(status=InvoiceStatus.DRAFT)

        result = await state_machine.transition(
            invoice, InvoiceStatus.SENT, TransitionTrigger.SEND, actor_id=USER_ID
        )

        assert result.is_ok()
        assert result.value.status == InvoiceStatus.SENT
        assert result.value.updated_at == clock.now()
        mock_invoice_repo.update.assert_called_once_with(invoice)
        mock_audit.record_status_change.assert_called_once_with(
            entity_type=AuditEntityType.INVOICE,
            entity_id=invoice.id,
            old_status=InvoiceStatus.DRAFT,
            new_status=InvoiceStatus.SENT,
            organization_id=ORG_ID,
            actor_id=USER_ID,
            trigger=TransitionTrigger.SEND,
        )

    async def test_illegal_transition_leaves_invoice_untouched(
        self, state_machine, mock_invoice_repo, mock_audit
    ):
        invoice = make_invoice(status=InvoiceStatus.SENT)

        result = await state_machine.transition(
            invoice, InvoiceStatus.PAID, TransitionTrigger.MANUAL, actor_id=USER_ID
        )

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert invoice.status == InvoiceStatus.SENT
        mock_invoice_repo.update.assert_not_called()
        mock_audit.record_status_change.assert_not_called()


class TestStatusAfterReversal:

    def test_past_due_lands_overdue(self, state_machine):
        invoice = make_invoice(status=InvoiceStatus.PAID, due_date=date(2024, 4, 9))

        assert state_machine.status_after_reversal(invoice) == InvoiceStatus.OVERDUE

    def test_due_today_lands_sent(self, state_machine):
        """Due dates compare by day; an invoice due today is not yet overdue"""
        invoice = make_invoice(status=InvoiceStatus.PAID, due_date=date(2024, 4, 10))

        assert state_machine.status_after_reversal(invoice) == InvoiceStatus.SENT

    def test_future_due_lands_sent(self, state_machine, clock):
        clock.set(datetime(2024, 4, 10, 23, 59))
        invoice = make_invoice(status=InvoiceStatus.PAID, due_date=date(2024, 5, 1))

        assert state_machine.status_after_reversal(invoice) == InvoiceStatus.SENT
