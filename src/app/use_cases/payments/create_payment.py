"""CreatePayment Use Case

Records a payment against an issued invoice and marks the invoice paid
once payments cover its total.
"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from src.domain.money import PAYMENT_TOLERANCE, ZERO, round2
from src.domain.organization_member import Permission
from src.domain.payment import Payment
from .dtos import (
    CreatePaymentCommandDTO,
    CreatePaymentResponseDTO,
    PaymentResponseDTO,
    PaymentSummaryDTO,
)

logger = logging.getLogger(__name__)


class CreatePayment:
    """
    Use Case: Apply a payment to an invoice

    Business Rules:
    1. Payments only apply to sent, overdue or paid invoices
    2. amount > 0 after rounding to cents
    3. Over-payment guard: amount <= remaining + 0.01
    4. When payments reach total - 0.01 the invoice becomes paid
    5. Payment, status change and audit entries commit together
    6. Invoice row is locked (SELECT FOR UPDATE) for the whole operation

    Flow:
    1. Lock invoice, verify create permission
    2. Check invoice accepts payments
    3. Compute remaining from existing payments
    4. Persist payment
    5. Transition to paid if covered
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        state_machine: InvoiceStateMachine,
        access_verifier: AccessVerifier,
        audit: AuditService,
        clock: Clock,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.state_machine = state_machine
        self.access_verifier = access_verifier
        self.audit = audit
        self.clock = clock

    async def execute(self, command: CreatePaymentCommandDTO) -> Result[CreatePaymentResponseDTO]:
        """
        Execute payment application

        Args:
            command: CreatePaymentCommandDTO with invoice_id, amount, date, method

        Returns:
            Result[CreatePaymentResponseDTO]: Payment and resulting invoice status
        """
        try:
            # Step 1: Lock invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", command.invoice_id))

            access = await authorize(self.access_verifier, invoice.organization_id, Permission.CREATE)
            if access.is_err():
                return access

            # Step 2: Only issued invoices take payments
            if not invoice.accepts_payments:
                return Return.err(
                    Error(
                        code=ErrorCode.PAYMENT_NOT_ALLOWED,
                        message=f"Cannot record a payment on a {invoice.status.value} invoice",
                        reason="Payments only apply to issued invoices",
                    )
                )

            # Stored at cent precision, so a sub-cent amount is zero
            amount = round2(command.amount)
            if amount <= ZERO:
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Payment amount must be at least 0.01",
                        details={"amount": ["Must be at least 0.01"]},
                    )
                )

            # Step 3: Over-payment guard
            existing = await self.payment_repo.list_by_invoice_id(invoice.id)
            total_paid = sum((p.amount for p in existing), ZERO)
            remaining = invoice.total - total_paid

            if command.amount > remaining + PAYMENT_TOLERANCE:
                remaining_display = max(ZERO, round2(remaining))
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message=f"Payment amount exceeds remaining balance of "
                                f"{remaining_display} {invoice.currency}",
                        reason=f"remaining={remaining_display}",
                        details={"amount": [f"Must not exceed {remaining_display}"]},
                    )
                )

            # Step 4: Persist payment
            payment = Payment(
                invoice_id=invoice.id,
                organization_id=invoice.organization_id,
                amount=amount,
                payment_date=command.payment_date,
                method=command.method,
                reference=command.reference,
                notes=command.notes,
                created_at=self.clock.now(),
            )
            created_payment = await self.payment_repo.create(payment)

            await self.audit.record(
                entity_type=AuditEntityType.PAYMENT,
                entity_id=created_payment.id,
                action=AuditAction.CREATE,
                new_data={
                    "invoice_id": invoice.id,
                    "amount": created_payment.amount,
                    "payment_date": created_payment.payment_date,
                    "method": created_payment.method,
                    "reference": created_payment.reference,
                },
                organization_id=invoice.organization_id,
                actor_id=access.value.user_id,
            )

            # Step 5: Mark paid when covered
            new_total_paid = total_paid + created_payment.amount
            if (
                new_total_paid >= invoice.total - PAYMENT_TOLERANCE
                and invoice.status != InvoiceStatus.PAID
            ):
                transitioned = await self.state_machine.transition(
                    invoice,
                    InvoiceStatus.PAID,
                    TransitionTrigger.PAYMENT,
                    actor_id=access.value.user_id,
                )
                if transitioned.is_err():
                    await self.uow.rollback()
                    return transitioned
                invoice = transitioned.value

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Payment {created_payment.id} of {created_payment.amount} {invoice.currency} "
                f"applied to invoice {invoice.invoice_number}; status={invoice.status.value}"
            )

            return Return.ok(
                CreatePaymentResponseDTO(
                    payment=PaymentResponseDTO.from_entity(created_payment),
                    invoice_status=invoice.status.value,
                    summary=PaymentSummaryDTO.from_payments(
                        invoice.id, invoice.total, existing + [created_payment]
                    ),
                )
            )

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to create payment for invoice {command.invoice_id}")
            return Return.err(database_error("create payment"))
