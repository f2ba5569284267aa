"""UpdateInvoice Use Case

Edits a draft invoice: replaces its items, recomputes totals and
re-resolves the currency snapshot from the current rate table.
"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.currency_snapshot_resolver import CurrencySnapshotResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.invoice_totals import compute_totals
from src.domain.organization_member import Permission
from .common import build_invoice_items, invoice_audit_data, to_line_items
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Edit a draft invoice

    Business Rules:
    1. Only draft invoices can be edited (CANNOT_EDIT otherwise)
    2. Items are destroyed and recreated, never diffed
    3. The snapshot is resolved again; the previous one is not reused
    4. The invoice row is locked for the duration of the edit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        snapshot_resolver: CurrencySnapshotResolver,
        access_verifier: AccessVerifier,
        audit: AuditService,
        clock: Clock,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.snapshot_resolver = snapshot_resolver
        self.access_verifier = access_verifier
        self.audit = audit
        self.clock = clock

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", command.invoice_id))

            access = await authorize(self.access_verifier, invoice.organization_id, Permission.UPDATE)
            if access.is_err():
                return access

            if not invoice.is_editable:
                return Return.err(
                    Error(
                        code=ErrorCode.CANNOT_EDIT,
                        message=f"Invoice {invoice.invoice_number} can only be edited in draft status. "
                                f"Current status: {invoice.status.value}",
                        reason="Items are frozen once the invoice leaves draft",
                    )
                )

            customer = await self.customer_repo.get_for_organization(
                command.customer_id, invoice.organization_id
            )
            if not customer:
                return Return.err(not_found(ErrorCode.CUSTOMER_NOT_FOUND, "Customer", command.customer_id))

            line_items = to_line_items(command.items)
            totals_result = compute_totals(
                line_items,
                command.tax_rate,
                command.discount_type,
                command.discount_value,
            )
            if totals_result.is_err():
                return totals_result
            totals = totals_result.value

            currency = command.currency.upper()
            snapshot = await self.snapshot_resolver.execute(
                invoice.organization_id, currency, totals.total
            )

            old_data = invoice_audit_data(invoice)

            invoice.customer_id = command.customer_id
            invoice.currency = currency
            invoice.issue_date = command.issue_date
            invoice.due_date = command.due_date
            invoice.discount_type = command.discount_type
            invoice.discount_value = command.discount_value if command.discount_type else None
            invoice.discount_amount = totals.discount_amount
            invoice.tax_rate = command.tax_rate
            invoice.subtotal = totals.subtotal
            invoice.tax_amount = totals.tax_amount
            invoice.total = totals.total
            invoice.exchange_rate_to_base = snapshot.exchange_rate_to_base
            invoice.total_in_base_currency = snapshot.total_in_base_currency
            invoice.notes = command.notes or None
            invoice.updated_at = self.clock.now()

            items = await self.invoice_item_repo.replace_for_invoice(
                invoice.id, build_invoice_items(invoice.id, line_items)
            )
            updated_invoice = await self.invoice_repo.update(invoice)

            await self.audit.record(
                entity_type=AuditEntityType.INVOICE,
                entity_id=invoice.id,
                action=AuditAction.UPDATE,
                old_data=old_data,
                new_data=invoice_audit_data(updated_invoice),
                organization_id=invoice.organization_id,
                actor_id=access.value.user_id,
            )

            await self.uow.commit()

            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice, items))

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to update invoice {command.invoice_id}")
            return Return.err(database_error("update invoice"))
