"""UpsertExchangeRate Use Case

Enters today's conversion rate for a currency. Rates form a history: a new
day adds a row, re-entering on the same day corrects that day's row.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.exchange_rate_repository import ExchangeRateRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.exchange_rate import ExchangeRate
from src.domain.money import round6
from src.domain.organization_member import Permission
from .dtos import UpsertExchangeRateCommandDTO, ExchangeRateResponseDTO

logger = logging.getLogger(__name__)

MAX_RATE = Decimal("999999")


class UpsertExchangeRate:
    """
    Use Case: Record a rate to the organization's base currency

    Business Rules:
    1. rate > 0, stored with 6 decimal places
    2. The base currency itself cannot be given a rate (INVALID_INPUT)
    3. effective_date is today; a row for today is updated, otherwise created
    4. Existing invoices keep their frozen snapshot
    """

    def __init__(
        self,
        uow: UnitOfWork,
        organization_repo: OrganizationRepository,
        exchange_rate_repo: ExchangeRateRepository,
        access_verifier: AccessVerifier,
        audit: AuditService,
        clock: Clock,
    ):
        self.uow = uow
        self.organization_repo = organization_repo
        self.exchange_rate_repo = exchange_rate_repo
        self.access_verifier = access_verifier
        self.audit = audit
        self.clock = clock

    async def execute(self, command: UpsertExchangeRateCommandDTO) -> Result[ExchangeRateResponseDTO]:
        try:
            access = await authorize(self.access_verifier, command.organization_id, Permission.UPDATE)
            if access.is_err():
                return access

            from_currency = command.from_currency.upper()
            if not from_currency.isalpha():
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Currency must be a 3-letter ISO 4217 code",
                        details={"from_currency": ["Must be 3 letters"]},
                    )
                )

            if command.rate <= 0 or command.rate > MAX_RATE:
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Exchange rate must be greater than 0",
                        details={"rate": [f"Must be greater than 0 and at most {MAX_RATE}"]},
                    )
                )

            organization = await self.organization_repo.get_by_id(command.organization_id)
            if not organization:
                return Return.err(
                    not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", command.organization_id)
                )

            if from_currency == organization.base_currency:
                return Return.err(
                    Error(
                        code=ErrorCode.INVALID_INPUT,
                        message=f"{from_currency} is the base currency and is always 1",
                        details={"from_currency": ["Cannot set a rate for the base currency"]},
                    )
                )

            rate = round6(command.rate)
            today = self.clock.today()
            now = self.clock.now()

            existing = await self.exchange_rate_repo.get_for_day(
                organization.id, from_currency, organization.base_currency, today
            )

            if existing:
                old_data = {"rate": existing.rate, "effective_date": existing.effective_date}
                existing.rate = rate
                existing.updated_at = now
                saved = await self.exchange_rate_repo.update(existing)
                action = AuditAction.UPDATE
            else:
                old_data = None
                saved = await self.exchange_rate_repo.create(
                    ExchangeRate(
                        organization_id=organization.id,
                        from_currency=from_currency,
                        to_currency=organization.base_currency,
                        rate=rate,
                        effective_date=today,
                        created_at=now,
                        updated_at=now,
                    )
                )
                action = AuditAction.CREATE

            await self.audit.record(
                entity_type=AuditEntityType.EXCHANGE_RATE,
                entity_id=saved.id,
                action=action,
                old_data=old_data,
                new_data={
                    "from_currency": saved.from_currency,
                    "to_currency": saved.to_currency,
                    "rate": saved.rate,
                    "effective_date": saved.effective_date,
                },
                organization_id=organization.id,
                actor_id=access.value.user_id,
            )

            await self.uow.commit()

            logger.info(
                f"Exchange rate {from_currency}->{organization.base_currency} = {rate} "
                f"({action.value}) for organization {organization.id} on {today}"
            )

            return Return.ok(ExchangeRateResponseDTO.from_entity(saved))

        except Exception:
            await self.uow.rollback()
            logger.exception(
                f"Failed to save exchange rate {command.from_currency} for organization "
                f"{command.organization_id}"
            )
            return Return.err(database_error("save exchange rate"))
