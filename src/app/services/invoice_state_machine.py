"""Invoice State Machine

Single entry point for invoice status changes. Manual updates, payment
reconciliation and the overdue sweep all call transition(); nothing
assigns Invoice.status directly.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.domain.audit_log import AuditEntityType
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_status import TransitionTrigger, allowed_targets, can_transition

logger = logging.getLogger(__name__)


class InvoiceStateMachine:

    def __init__(self, invoice_repo: InvoiceRepository, audit: AuditService, clock: Clock):
        self.invoice_repo = invoice_repo
        self.audit = audit
        self.clock = clock

    async def transition(
        self,
        invoice: Invoice,
        target: InvoiceStatus,
        trigger: TransitionTrigger,
        actor_id: Optional[str] = None,
    ) -> Result[Invoice]:
        """
        Move an invoice to a new status

        The caller owns the transaction; the status update and its audit
        entry are written into it and committed by the caller.

        Args:
            invoice: Invoice loaded (and locked) by the caller
            target: Desired status
            trigger: What caused the change
            actor_id: User responsible, None for scheduled jobs

        Returns:
            Result[Invoice]: Updated invoice or INVALID_STATUS_TRANSITION
        """
        current = invoice.status
        if not can_transition(current, target, trigger):
            allowed = sorted(s.value for s in allowed_targets(current, trigger))
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    message=f"Invoice {invoice.invoice_number} cannot move from "
                            f"{current.value} to {target.value}",
                    reason=f"trigger={trigger.value}, allowed={allowed or 'none'}",
                )
            )

        invoice.status = target
        invoice.updated_at = self.clock.now()
        updated = await self.invoice_repo.update(invoice)

        await self.audit.record_status_change(
            entity_type=AuditEntityType.INVOICE,
            entity_id=invoice.id,
            old_status=current,
            new_status=target,
            organization_id=invoice.organization_id,
            actor_id=actor_id,
            trigger=trigger,
        )

        logger.info(
            f"Invoice {invoice.invoice_number} ({invoice.id}) {current.value} -> "
            f"{target.value} via {trigger.value}"
        )
        return Return.ok(updated)

    def status_after_reversal(self, invoice: Invoice) -> InvoiceStatus:
        """Landing status when a paid invoice falls below its total"""
        if invoice.due_date < self.clock.today():
            return InvoiceStatus.OVERDUE
        return InvoiceStatus.SENT
