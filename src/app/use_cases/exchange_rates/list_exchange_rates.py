"""ListExchangeRates Use Case"""

from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found
from src.app.repositories.exchange_rate_repository import ExchangeRateRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.domain.organization_member import Permission
from .dtos import ExchangeRateListResponseDTO, ExchangeRateResponseDTO


class ListExchangeRates:
    """
    Use Case: Current rate of every currency, keyed to the base currency

    Only the latest effective_date per currency is returned.
    """

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        exchange_rate_repo: ExchangeRateRepository,
        access_verifier: AccessVerifier,
    ):
        self.organization_repo = organization_repo
        self.exchange_rate_repo = exchange_rate_repo
        self.access_verifier = access_verifier

    async def execute(self, organization_id: str) -> Result[ExchangeRateListResponseDTO]:
        access = await authorize(self.access_verifier, organization_id, Permission.READ)
        if access.is_err():
            return access

        organization = await self.organization_repo.get_by_id(organization_id)
        if not organization:
            return Return.err(not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", organization_id))

        rates = await self.exchange_rate_repo.list_current(organization_id, organization.base_currency)
        return Return.ok(
            ExchangeRateListResponseDTO(
                base_currency=organization.base_currency,
                rates=[ExchangeRateResponseDTO.from_entity(rate) for rate in rates],
            )
        )
