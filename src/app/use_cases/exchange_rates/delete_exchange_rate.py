"""DeleteExchangeRate Use Case"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.exchange_rate_repository import ExchangeRateRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.organization_member import Permission
from .dtos import DeleteExchangeRateResponseDTO

logger = logging.getLogger(__name__)


class DeleteExchangeRate:
    """
    Use Case: Remove a rate row

    Invoices already frozen with this rate are unaffected.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        exchange_rate_repo: ExchangeRateRepository,
        access_verifier: AccessVerifier,
        audit: AuditService,
    ):
        self.uow = uow
        self.exchange_rate_repo = exchange_rate_repo
        self.access_verifier = access_verifier
        self.audit = audit

    async def execute(
        self, organization_id: str, exchange_rate_id: str
    ) -> Result[DeleteExchangeRateResponseDTO]:
        try:
            access = await authorize(self.access_verifier, organization_id, Permission.DELETE)
            if access.is_err():
                return access

            exchange_rate = await self.exchange_rate_repo.get_by_id(exchange_rate_id)
            if not exchange_rate or exchange_rate.organization_id != organization_id:
                return Return.err(
                    not_found(ErrorCode.EXCHANGE_RATE_NOT_FOUND, "Exchange rate", exchange_rate_id)
                )

            old_data = {
                "from_currency": exchange_rate.from_currency,
                "to_currency": exchange_rate.to_currency,
                "rate": exchange_rate.rate,
                "effective_date": exchange_rate.effective_date,
            }
            await self.exchange_rate_repo.delete(exchange_rate)

            await self.audit.record(
                entity_type=AuditEntityType.EXCHANGE_RATE,
                entity_id=exchange_rate_id,
                action=AuditAction.DELETE,
                old_data=old_data,
                organization_id=organization_id,
                actor_id=access.value.user_id,
            )

            await self.uow.commit()

            return Return.ok(DeleteExchangeRateResponseDTO(exchange_rate_id=exchange_rate_id))

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to delete exchange rate {exchange_rate_id}")
            return Return.err(database_error("delete exchange rate"))
