"""Reporting API Routes"""

from fastapi import APIRouter, Depends, Query

from src.adapter.wiring import UseCaseFactory
from src.api.error import raise_for_error
from src.api.schemas.invoice_request import invoice_filters
from src.app.repositories.invoice_repository import InvoiceFilters
from src.app.use_cases.reporting.dtos import InvoiceStatsResponseDTO, RevenueStatsResponseDTO
from src.depends import get_use_cases

router = APIRouter(prefix="/organizations/{organization_id}/reports", tags=["Reports"])


@router.get("/invoice-stats", response_model=InvoiceStatsResponseDTO)
async def get_invoice_stats(
    organization_id: str,
    filters: InvoiceFilters = Depends(invoice_filters),
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Counts per status, revenue (paid) and outstanding (sent + overdue).

    Base-currency totals leave out foreign-currency invoices created without
    a rate; their currencies are listed in `missing_historical_rates`.
    """
    result = await use_cases.get_invoice_stats().execute(
        organization_id, filters=filters
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/revenue/monthly", response_model=RevenueStatsResponseDTO)
async def get_monthly_revenue(
    organization_id: str,
    months: int = Query(default=12, ge=1, le=60),
    filters: InvoiceFilters = Depends(invoice_filters),
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.get_revenue_stats().monthly(
        organization_id, months=months, filters=filters
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/revenue/yearly", response_model=RevenueStatsResponseDTO)
async def get_yearly_revenue(
    organization_id: str,
    years: int = Query(default=5, ge=1, le=20),
    filters: InvoiceFilters = Depends(invoice_filters),
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.get_revenue_stats().yearly(
        organization_id, years=years, filters=filters
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
