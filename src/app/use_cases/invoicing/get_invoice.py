"""GetInvoice Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.use_cases.payments.dtos import PaymentSummaryDTO
from src.domain.organization_member import Permission
from .dtos import InvoiceDetailResponseDTO, InvoiceResponseDTO


class GetInvoice:
    """
    Use Case: Read an invoice with its items and payment summary
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        payment_repo: PaymentRepository,
        access_verifier: AccessVerifier,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.payment_repo = payment_repo
        self.access_verifier = access_verifier

    async def execute(self, invoice_id: str) -> Result[InvoiceDetailResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", invoice_id))

        access = await authorize(self.access_verifier, invoice.organization_id, Permission.READ)
        if access.is_err():
            return access

        items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)
        payments = await self.payment_repo.list_by_invoice_id(invoice.id)

        return Return.ok(
            InvoiceDetailResponseDTO(
                invoice=InvoiceResponseDTO.from_entity(invoice, items),
                payment_summary=PaymentSummaryDTO.from_payments(invoice.id, invoice.total, payments),
            )
        )
