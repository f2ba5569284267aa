"""UpdateOrganizationBaseCurrency Use Case

Changes the currency every report and new snapshot is normalized to.
"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.organization_repository import OrganizationRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.audit_log import AuditAction, AuditEntityType
from src.domain.organization_member import Permission
from .dtos import OrganizationResponseDTO, UpdateBaseCurrencyCommandDTO

logger = logging.getLogger(__name__)


class UpdateOrganizationBaseCurrency:
    """
    Use Case: Change the organization's base currency

    Business Rules:
    1. Requires update permission, which only admins hold
    2. base_currency is a 3-letter ISO 4217 code, stored upper-case
    3. Re-submitting the current base currency is a no-op (no audit entry)
    4. Existing invoices keep exchange_rate_to_base and total_in_base_currency
    5. New snapshots and the current-rate list use rates keyed to the new base
    """

    def __init__(
        self,
        uow: UnitOfWork,
        organization_repo: OrganizationRepository,
        access_verifier: AccessVerifier,
        audit: AuditService,
        clock: Clock,
    ):
        self.uow = uow
        self.organization_repo = organization_repo
        self.access_verifier = access_verifier
        self.audit = audit
        self.clock = clock

    async def execute(self, command: UpdateBaseCurrencyCommandDTO) -> Result[OrganizationResponseDTO]:
        try:
            access = await authorize(self.access_verifier, command.organization_id, Permission.UPDATE)
            if access.is_err():
                return access

            base_currency = command.base_currency.upper()
            if not (base_currency.isascii() and base_currency.isalpha()):
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Currency must be a 3-letter ISO 4217 code",
                        details={"base_currency": ["Must be 3 letters"]},
                    )
                )

            organization = await self.organization_repo.get_by_id(command.organization_id)
            if not organization:
                return Return.err(
                    not_found(ErrorCode.ORGANIZATION_NOT_FOUND, "Organization", command.organization_id)
                )

            if organization.base_currency == base_currency:
                return Return.ok(OrganizationResponseDTO.from_entity(organization))

            previous = organization.base_currency
            organization.base_currency = base_currency
            organization.updated_at = self.clock.now()
            saved = await self.organization_repo.update(organization)

            await self.audit.record(
                entity_type=AuditEntityType.ORGANIZATION,
                entity_id=saved.id,
                action=AuditAction.UPDATE,
                old_data={"base_currency": previous},
                new_data={"base_currency": saved.base_currency},
                organization_id=saved.id,
                actor_id=access.value.user_id,
            )

            await self.uow.commit()

            logger.info(
                f"Organization {saved.id} base currency changed {previous} -> {saved.base_currency} "
                f"by {access.value.user_id}"
            )

            return Return.ok(OrganizationResponseDTO.from_entity(saved))

        except Exception:
            await self.uow.rollback()
            logger.exception(
                f"Failed to change base currency of organization {command.organization_id}"
            )
            return Return.err(database_error("update organization"))
