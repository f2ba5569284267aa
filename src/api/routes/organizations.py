"""Organization API Routes"""

from fastapi import APIRouter, Depends

from src.adapter.wiring import UseCaseFactory
from src.api.error import raise_for_error
from src.api.schemas.organization_request import OrganizationSettingsRequestSchema
from src.app.use_cases.organizations.dtos import OrganizationResponseDTO, UpdateBaseCurrencyCommandDTO
from src.depends import get_use_cases

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.patch("/{organization_id}", response_model=OrganizationResponseDTO)
async def update_organization_settings(
    organization_id: str,
    request: OrganizationSettingsRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Change the organization base currency (admins only).

    Invoices already written keep their frozen snapshot; new invoices and
    the current-rate list use rates to the new base currency.

    Responses:
    - 200: Organization updated
    - 403: Caller is not an admin (FORBIDDEN)
    """
    command = UpdateBaseCurrencyCommandDTO(
        organization_id=organization_id,
        base_currency=request.base_currency,
    )
    result = await use_cases.update_organization_base_currency().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
