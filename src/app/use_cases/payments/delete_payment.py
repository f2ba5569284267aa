"""DeletePayment Use Case

Reverses a payment. A paid invoice whose payments fall below its total
returns to sent, or to overdue when its due date has passed.
"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from src.domain.money import PAYMENT_TOLERANCE, ZERO
from src.domain.organization_member import Permission
from .dtos import DeletePaymentResponseDTO, PaymentSummaryDTO

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Reverse a payment

    Business Rules:
    1. Invoice row is locked before the payment is removed
    2. If the invoice was paid and remaining payments < total - 0.01,
       it moves to overdue (due_date < today) or sent
    3. Payment deletion, status change and audit entries commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        state_machine: InvoiceStateMachine,
        access_verifier: AccessVerifier,
        audit: AuditService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.state_machine = state_machine
        self.access_verifier = access_verifier
        self.audit = audit

    async def execute(self, payment_id: str) -> Result[DeletePaymentResponseDTO]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(not_found(ErrorCode.PAYMENT_NOT_FOUND, "Payment", payment_id))

            access = await authorize(self.access_verifier, payment.organization_id, Permission.DELETE)
            if access.is_err():
                return access

            invoice = await self.invoice_repo.get_by_id(payment.invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", payment.invoice_id)
                )

            payments = await self.payment_repo.list_by_invoice_id(invoice.id)
            remaining_payments = [p for p in payments if p.id != payment.id]
            new_total_paid = sum((p.amount for p in remaining_payments), ZERO)

            old_data = {
                "invoice_id": invoice.id,
                "amount": payment.amount,
                "payment_date": payment.payment_date,
                "method": payment.method,
                "reference": payment.reference,
            }
            await self.payment_repo.delete(payment)

            await self.audit.record(
                entity_type=AuditEntityType.PAYMENT,
                entity_id=payment_id,
                action=AuditAction.DELETE,
                old_data=old_data,
                organization_id=invoice.organization_id,
                actor_id=access.value.user_id,
            )

            if (
                invoice.status == InvoiceStatus.PAID
                and new_total_paid < invoice.total - PAYMENT_TOLERANCE
            ):
                target = self.state_machine.status_after_reversal(invoice)
                transitioned = await self.state_machine.transition(
                    invoice,
                    target,
                    TransitionTrigger.PAYMENT_REVERSAL,
                    actor_id=access.value.user_id,
                )
                if transitioned.is_err():
                    await self.uow.rollback()
                    return transitioned
                invoice = transitioned.value

            await self.uow.commit()

            logger.info(
                f"Payment {payment_id} removed from invoice {invoice.invoice_number}; "
                f"status={invoice.status.value}"
            )

            return Return.ok(
                DeletePaymentResponseDTO(
                    payment_id=payment_id,
                    invoice_id=invoice.id,
                    invoice_status=invoice.status.value,
                    summary=PaymentSummaryDTO.from_payments(
                        invoice.id, invoice.total, remaining_payments
                    ),
                )
            )

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to delete payment {payment_id}")
            return Return.err(database_error("delete payment"))
