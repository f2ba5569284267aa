"""GetInvoiceStats Use Case

Dashboard statistics: counts per status, paid revenue and outstanding
amounts per currency and in the base currency.
"""

import logging
from decimal import Decimal
from typing import Dict, Optional, Set
from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_repository import InvoiceRepository, InvoiceFilters
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.domain.invoice import InvoiceStatus
from src.domain.money import ZERO, round2
from src.domain.organization_member import Permission
from .base_currency import resolve_base_amount
from .dtos import InvoiceStatsResponseDTO

logger = logging.getLogger(__name__)

OUTSTANDING_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class GetInvoiceStats:
    """
    Use Case: Invoice statistics for an organization

    Business Rules:
    1. Revenue is the sum of paid invoices; outstanding is sent + overdue
    2. Per-currency sums use the raw invoice total
    3. Base-currency sums use the frozen snapshot, or the raw total when the
       invoice is in the base currency
    4. Any other invoice contributes its currency to missing_historical_rates
       and nothing to the base-currency sums
    """

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        invoice_repo: InvoiceRepository,
        access_verifier: AccessVerifier,
    ):
        self.organization_repo = organization_repo
        self.invoice_repo = invoice_repo
        self.access_verifier = access_verifier

    async def execute(
        self,
        organization_id: str,
        filters: Optional[InvoiceFilters] = None,
    ) -> Result[InvoiceStatsResponseDTO]:
        access = await authorize(self.access_verifier, organization_id, Permission.READ)
        if access.is_err():
            return access

        try:
            organization = await self.organization_repo.get_by_id(organization_id)
            if not organization:
                return Return.err(
                    not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", organization_id)
                )
            base_currency = organization.base_currency

            counts = await self.invoice_repo.count_by_status(organization_id, filters)
            paid = await self.invoice_repo.list_for_reporting(
                organization_id, [InvoiceStatus.PAID], filters
            )
            outstanding = await self.invoice_repo.list_for_reporting(
                organization_id, OUTSTANDING_STATUSES, filters
            )
        except Exception:
            logger.exception(f"Failed to load invoice stats for organization {organization_id}")
            return Return.err(database_error("load invoice stats"))

        missing: Set[str] = set()

        revenue_by_currency: Dict[str, Decimal] = {}
        revenue_in_base = ZERO
        for invoice in paid:
            revenue_by_currency[invoice.currency] = (
                revenue_by_currency.get(invoice.currency, ZERO) + invoice.total
            )
            amount = resolve_base_amount(invoice, base_currency)
            if amount is None:
                missing.add(invoice.currency)
            else:
                revenue_in_base += amount

        outstanding_by_currency: Dict[str, Decimal] = {}
        outstanding_in_base = ZERO
        for invoice in outstanding:
            outstanding_by_currency[invoice.currency] = (
                outstanding_by_currency.get(invoice.currency, ZERO) + invoice.total
            )
            amount = resolve_base_amount(invoice, base_currency)
            if amount is None:
                missing.add(invoice.currency)
            else:
                outstanding_in_base += amount

        return Return.ok(
            InvoiceStatsResponseDTO(
                organization_id=organization_id,
                base_currency=base_currency,
                total_count=sum(counts.values()),
                draft_count=counts.get(InvoiceStatus.DRAFT, 0),
                sent_count=counts.get(InvoiceStatus.SENT, 0),
                paid_count=counts.get(InvoiceStatus.PAID, 0),
                overdue_count=counts.get(InvoiceStatus.OVERDUE, 0),
                cancelled_count=counts.get(InvoiceStatus.CANCELLED, 0),
                revenue_by_currency={k: round2(v) for k, v in sorted(revenue_by_currency.items())},
                outstanding_by_currency={
                    k: round2(v) for k, v in sorted(outstanding_by_currency.items())
                },
                revenue_in_base_currency=round2(revenue_in_base),
                outstanding_in_base_currency=round2(outstanding_in_base),
                missing_historical_rates=sorted(missing),
            )
        )
