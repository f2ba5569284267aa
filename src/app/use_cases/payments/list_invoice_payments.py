"""ListInvoicePayments Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.domain.organization_member import Permission
from .dtos import PaymentListResponseDTO, PaymentResponseDTO, PaymentSummaryDTO


class ListInvoicePayments:
    """Payments of an invoice, newest payment date first, with the summary"""

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        access_verifier: AccessVerifier,
    ):
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.access_verifier = access_verifier

    async def execute(self, invoice_id: str) -> Result[PaymentListResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", invoice_id))

        access = await authorize(self.access_verifier, invoice.organization_id, Permission.READ)
        if access.is_err():
            return access

        payments = await self.payment_repo.list_by_invoice_id(invoice.id)
        return Return.ok(
            PaymentListResponseDTO(
                invoice_id=invoice.id,
                payments=[PaymentResponseDTO.from_entity(p) for p in payments],
                summary=PaymentSummaryDTO.from_payments(invoice.id, invoice.total, payments),
            )
        )
