"""UpdateInvoiceStatus Use Case

Explicit status change requested by a user (send or cancel).
"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.invoice_status import TransitionTrigger
from src.domain.organization_member import Permission
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Manually change an invoice status

    Business Rules:
    1. Only manual transitions are accepted (draft -> sent, cancellation)
    2. paid and overdue are reached through payments and the sweep only
    3. Requesting the current status is a no-op
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        state_machine: InvoiceStateMachine,
        access_verifier: AccessVerifier,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.state_machine = state_machine
        self.access_verifier = access_verifier

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", command.invoice_id))

            access = await authorize(self.access_verifier, invoice.organization_id, Permission.UPDATE)
            if access.is_err():
                return access

            if invoice.status != command.status:
                transitioned = await self.state_machine.transition(
                    invoice,
                    command.status,
                    TransitionTrigger.MANUAL,
                    actor_id=access.value.user_id,
                )
                if transitioned.is_err():
                    await self.uow.rollback()
                    return transitioned
                invoice = transitioned.value
                await self.uow.commit()

            items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)
            return Return.ok(InvoiceResponseDTO.from_entity(invoice, items))

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to update status of invoice {command.invoice_id}")
            return Return.err(database_error("update invoice status"))
