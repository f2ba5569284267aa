"""CreateInvoice Use Case

Creates a draft invoice with computed totals and a frozen currency snapshot.
"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.currency_snapshot_resolver import CurrencySnapshotResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_sequence import format_invoice_number
from src.domain.invoice_totals import compute_totals
from src.domain.organization_member import Permission
from .common import build_invoice_items, invoice_audit_data, to_line_items
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create a draft invoice

    Business Rules:
    1. Caller needs create permission on the organization
    2. Customer must belong to the organization
    3. Totals are computed by the totals calculator (validation failures abort)
    4. Invoice number is INV-YYYY-NNNN from the (organization, year) counter
    5. Currency snapshot is resolved from the current rate table
    6. Invoice is created with status=draft

    Flow:
    1. Verify access
    2. Verify organization and customer
    3. Compute totals
    4. Allocate invoice number
    5. Resolve currency snapshot
    6. Persist invoice, items and audit entry
    7. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        organization_repo: OrganizationRepository,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        sequence_repo: InvoiceSequenceRepository,
        snapshot_resolver: CurrencySnapshotResolver,
        access_verifier: AccessVerifier,
        audit: AuditService,
        clock: Clock,
    ):
        self.uow = uow
        self.organization_repo = organization_repo
        self.customer_repo = customer_repo
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.sequence_repo = sequence_repo
        self.snapshot_resolver = snapshot_resolver
        self.access_verifier = access_verifier
        self.audit = audit
        self.clock = clock

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with customer, currency, dates, items

        Returns:
            Result[InvoiceResponseDTO]: Draft invoice or error
        """
        try:
            # Step 1: Verify access
            access = await authorize(
                self.access_verifier, command.organization_id, Permission.CREATE
            )
            if access.is_err():
                return access

            # Step 2: Verify organization and customer
            organization = await self.organization_repo.get_by_id(command.organization_id)
            if not organization:
                return Return.err(
                    not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", command.organization_id)
                )

            customer = await self.customer_repo.get_for_organization(
                command.customer_id, command.organization_id
            )
            if not customer:
                return Return.err(
                    not_found(ErrorCode.CUSTOMER_NOT_FOUND, "Customer", command.customer_id)
                )

            # Step 3: Compute totals
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

            # Step 4: Allocate invoice number
            year = self.clock.today().year
            sequence = await self.sequence_repo.next_value(command.organization_id, year)
            invoice_number = format_invoice_number(year, sequence)

            # Step 5: Freeze currency snapshot
            currency = command.currency.upper()
            snapshot = await self.snapshot_resolver.execute(
                command.organization_id, currency, totals.total
            )

            # Step 6: Persist invoice and items
            now = self.clock.now()
            invoice = Invoice(
                organization_id=command.organization_id,
                customer_id=command.customer_id,
                invoice_number=invoice_number,
                currency=currency,
                issue_date=command.issue_date,
                due_date=command.due_date,
                discount_type=command.discount_type,
                discount_value=command.discount_value if command.discount_type else None,
                discount_amount=totals.discount_amount,
                tax_rate=command.tax_rate,
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                exchange_rate_to_base=snapshot.exchange_rate_to_base,
                total_in_base_currency=snapshot.total_in_base_currency,
                status=InvoiceStatus.DRAFT,
                notes=command.notes or None,
                created_at=now,
                updated_at=now,
            )
            created_invoice = await self.invoice_repo.create(invoice)
            items = await self.invoice_item_repo.replace_for_invoice(
                created_invoice.id, build_invoice_items(created_invoice.id, line_items)
            )

            await self.audit.record(
                entity_type=AuditEntityType.INVOICE,
                entity_id=created_invoice.id,
                action=AuditAction.CREATE,
                new_data=invoice_audit_data(created_invoice),
                organization_id=command.organization_id,
                actor_id=access.value.user_id,
            )

            # Step 7: Commit transaction
            await self.uow.commit()

            if snapshot.is_missing:
                logger.warning(
                    f"Invoice {invoice_number} created in {currency} without an exchange rate "
                    f"to {organization.base_currency}"
                )

            return Return.ok(InvoiceResponseDTO.from_entity(created_invoice, items))

        except Exception:
            await self.uow.rollback()
            logger.exception(
                f"Failed to create invoice for organization {command.organization_id}"
            )
            return Return.err(database_error("create invoice"))
