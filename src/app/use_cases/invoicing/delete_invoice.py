"""DeleteInvoice Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.organization_member import Permission
from .common import invoice_audit_data
from .dtos import DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Business Rules:
    1. Only draft or cancelled invoices can be deleted
    2. An invoice that still has payments cannot be deleted
    3. Items are deleted with the invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        payment_repo: PaymentRepository,
        access_verifier: AccessVerifier,
        audit: AuditService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.payment_repo = payment_repo
        self.access_verifier = access_verifier
        self.audit = audit

    async def execute(self, invoice_id: str) -> Result[DeleteInvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", invoice_id))

            access = await authorize(self.access_verifier, invoice.organization_id, Permission.DELETE)
            if access.is_err():
                return access

            if not invoice.is_deletable:
                return Return.err(
                    Error(
                        code=ErrorCode.CANNOT_DELETE,
                        message=f"Invoice {invoice.invoice_number} can only be deleted in draft "
                                f"or cancelled status. Current status: {invoice.status.value}",
                    )
                )

            payment_count = await self.payment_repo.count_by_invoice_id(invoice.id)
            if payment_count > 0:
                return Return.err(
                    Error(
                        code=ErrorCode.CANNOT_DELETE,
                        message=f"Invoice {invoice.invoice_number} has {payment_count} payment(s)",
                        reason="Delete the payments first",
                    )
                )

            old_data = invoice_audit_data(invoice)
            await self.invoice_item_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)

            await self.audit.record(
                entity_type=AuditEntityType.INVOICE,
                entity_id=invoice.id,
                action=AuditAction.DELETE,
                old_data=old_data,
                organization_id=invoice.organization_id,
                actor_id=access.value.user_id,
            )

            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} ({invoice.id}) deleted by {access.value.user_id}")

            return Return.ok(
                DeleteInvoiceResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                )
            )

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to delete invoice {invoice_id}")
            return Return.err(database_error("delete invoice"))
