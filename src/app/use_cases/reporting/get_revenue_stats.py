"""GetRevenueStats Use Case

Revenue and outstanding amounts in the base currency over dense monthly or
yearly buckets, oldest first.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Hashable, List, Optional, Set, Tuple
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_repository import InvoiceRepository, InvoiceFilters
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.clock import Clock
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import ZERO, round2
from src.domain.organization_member import Permission
from .base_currency import resolve_base_amount
from .dtos import RevenueBucketDTO, RevenueStatsResponseDTO

logger = logging.getLogger(__name__)

MAX_MONTHS = 60
MAX_YEARS = 20

REPORTED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


def last_n_months(today: date, n: int) -> List[Tuple[int, int]]:
    # oldest to newest
    year = today.year
    month = today.month
    months = []
    for _ in range(n):
        months.append((year, month))
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    return list(reversed(months))


def last_n_years(today: date, n: int) -> List[int]:
    return list(range(today.year - n + 1, today.year + 1))


class _Bucket:
    __slots__ = ("revenue", "outstanding", "invoice_count", "missing_rate_count")

    def __init__(self):
        self.revenue = ZERO
        self.outstanding = ZERO
        self.invoice_count = 0
        self.missing_rate_count = 0


class GetRevenueStats:
    """
    Use Case: Revenue time series

    Business Rules:
    1. Buckets are keyed by issue_date and counted back from the current
       month/year; every bucket is present even when empty
    2. revenue sums paid invoices, outstanding sums sent + overdue
    3. Amounts use the same base-currency rule as the invoice stats: an
       invoice without a snapshot in a foreign currency is counted in
       missing_rate_count and its currency listed, never approximated
    """

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        invoice_repo: InvoiceRepository,
        access_verifier: AccessVerifier,
        clock: Clock,
    ):
        self.organization_repo = organization_repo
        self.invoice_repo = invoice_repo
        self.access_verifier = access_verifier
        self.clock = clock

    async def monthly(
        self,
        organization_id: str,
        months: int = 12,
        filters: Optional[InvoiceFilters] = None,
    ) -> Result[RevenueStatsResponseDTO]:
        if months < 1 or months > MAX_MONTHS:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=f"months must be between 1 and {MAX_MONTHS}",
                    details={"months": [f"Must be between 1 and {MAX_MONTHS}"]},
                )
            )

        keys = last_n_months(self.clock.today(), months)
        first_year, first_month = keys[0]

        return await self._aggregate(
            organization_id,
            granularity="monthly",
            keys=keys,
            issued_from=date(first_year, first_month, 1),
            key_of=lambda invoice: (invoice.issue_date.year, invoice.issue_date.month),
            bucket_labels=lambda key: (f"{key[0]:04d}-{key[1]:02d}", key[0], key[1]),
            filters=filters,
        )

    async def yearly(
        self,
        organization_id: str,
        years: int = 5,
        filters: Optional[InvoiceFilters] = None,
    ) -> Result[RevenueStatsResponseDTO]:
        if years < 1 or years > MAX_YEARS:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=f"years must be between 1 and {MAX_YEARS}",
                    details={"years": [f"Must be between 1 and {MAX_YEARS}"]},
                )
            )

        keys = last_n_years(self.clock.today(), years)

        return await self._aggregate(
            organization_id,
            granularity="yearly",
            keys=keys,
            issued_from=date(keys[0], 1, 1),
            key_of=lambda invoice: invoice.issue_date.year,
            bucket_labels=lambda key: (f"{key:04d}", key, None),
            filters=filters,
        )

    async def _aggregate(
        self,
        organization_id: str,
        granularity: str,
        keys: List[Hashable],
        issued_from: date,
        key_of: Callable[[Invoice], Hashable],
        bucket_labels: Callable[[Hashable], Tuple[str, int, Optional[int]]],
        filters: Optional[InvoiceFilters],
    ) -> Result[RevenueStatsResponseDTO]:
        access = await authorize(self.access_verifier, organization_id, Permission.READ)
        if access.is_err():
            return access

        try:
            organization = await self.organization_repo.get_by_id(organization_id)
            if not organization:
                return Return.err(
                    not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", organization_id)
                )

            invoices = await self.invoice_repo.list_for_reporting(
                organization_id,
                REPORTED_STATUSES,
                filters,
                issued_from=issued_from,
                issued_to=self.clock.today(),
            )
        except Exception:
            logger.exception(
                f"Failed to load {granularity} revenue stats for organization {organization_id}"
            )
            return Return.err(database_error("load revenue stats"))

        base_currency = organization.base_currency
        buckets: Dict[Hashable, _Bucket] = {key: _Bucket() for key in keys}
        missing: Set[str] = set()

        for invoice in invoices:
            bucket = buckets.get(key_of(invoice))
            if bucket is None:
                continue

            bucket.invoice_count += 1
            amount = resolve_base_amount(invoice, base_currency)
            if amount is None:
                bucket.missing_rate_count += 1
                missing.add(invoice.currency)
                continue

            if invoice.status == InvoiceStatus.PAID:
                bucket.revenue += amount
            else:
                bucket.outstanding += amount

        bucket_dtos = []
        for key in keys:
            period, year, month = bucket_labels(key)
            bucket = buckets[key]
            bucket_dtos.append(
                RevenueBucketDTO(
                    period=period,
                    year=year,
                    month=month,
                    revenue=round2(bucket.revenue),
                    outstanding=round2(bucket.outstanding),
                    invoice_count=bucket.invoice_count,
                    missing_rate_count=bucket.missing_rate_count,
                )
            )

        if missing:
            logger.info(
                f"{granularity} revenue for organization {organization_id} excludes "
                f"invoices without rates: {sorted(missing)}"
            )

        return Return.ok(
            RevenueStatsResponseDTO(
                organization_id=organization_id,
                base_currency=base_currency,
                granularity=granularity,
                buckets=bucket_dtos,
                total_revenue=round2(sum((b.revenue for b in bucket_dtos), ZERO)),
                total_outstanding=round2(sum((b.outstanding for b in bucket_dtos), ZERO)),
                missing_historical_rates=sorted(missing),
            )
        )
