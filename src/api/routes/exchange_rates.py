"""Exchange Rate API Routes"""

from fastapi import APIRouter, Depends

from src.adapter.wiring import UseCaseFactory
from src.api.error import raise_for_error
from src.api.schemas.exchange_rate_request import ExchangeRateRequestSchema
from src.app.use_cases.exchange_rates.dtos import (
    DeleteExchangeRateResponseDTO,
    ExchangeRateListResponseDTO,
    ExchangeRateResponseDTO,
    UpsertExchangeRateCommandDTO,
)
from src.depends import get_use_cases

router = APIRouter(prefix="/organizations/{organization_id}/exchange-rates", tags=["Exchange Rates"])


@router.put("", response_model=ExchangeRateResponseDTO)
async def upsert_exchange_rate(
    organization_id: str,
    request: ExchangeRateRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Enter today's rate of a currency to the organization base currency.

    Invoices created earlier keep the rate they were frozen with.
    """
    command = UpsertExchangeRateCommandDTO(
        organization_id=organization_id,
        from_currency=request.from_currency,
        rate=request.rate,
    )
    result = await use_cases.upsert_exchange_rate().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=ExchangeRateListResponseDTO)
async def list_exchange_rates(
    organization_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.list_exchange_rates().execute(organization_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{exchange_rate_id}", response_model=DeleteExchangeRateResponseDTO)
async def delete_exchange_rate(
    organization_id: str,
    exchange_rate_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.delete_exchange_rate().execute(
        organization_id, exchange_rate_id
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
