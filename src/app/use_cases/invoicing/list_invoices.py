"""ListInvoices Use Case"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository, InvoiceFilters
from src.app.services.access_verifier import AccessVerifier, authorize
from src.domain.organization_member import Permission
from .dtos import InvoiceListResponseDTO, InvoiceResponseDTO

MAX_PAGE_SIZE = 100


class ListInvoices:
    """
    Use Case: List an organization's invoices, newest first

    Items are not loaded; use GetInvoice for the full invoice.
    """

    def __init__(self, invoice_repo: InvoiceRepository, access_verifier: AccessVerifier):
        self.invoice_repo = invoice_repo
        self.access_verifier = access_verifier

    async def execute(
        self,
        organization_id: str,
        filters: Optional[InvoiceFilters] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[InvoiceListResponseDTO]:
        access = await authorize(self.access_verifier, organization_id, Permission.READ)
        if access.is_err():
            return access

        limit = max(1, min(limit, MAX_PAGE_SIZE))
        offset = max(0, offset)

        invoices = await self.invoice_repo.list_by_organization(
            organization_id, filters=filters, limit=limit, offset=offset
        )
        return Return.ok(
            InvoiceListResponseDTO(
                invoices=[InvoiceResponseDTO.from_entity(invoice) for invoice in invoices],
                limit=limit,
                offset=offset,
            )
        )
