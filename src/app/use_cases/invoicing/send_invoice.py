"""SendInvoice Use Case

Issues a draft invoice and hands it to the delivery channel.
"""

import logging
from libs.result import Result, Return
from src.app.errors import ErrorCode, not_found, database_error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.invoice_delivery_service import InvoiceDeliveryService
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from src.domain.organization_member import Permission
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class SendInvoice:
    """
    Use Case: Send a draft invoice

    Flow:
    1. Lock invoice, verify update permission
    2. Transition draft -> sent (items freeze)
    3. Commit
    4. Hand off to the delivery channel; a delivery failure is logged and
       does not revert the status
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        customer_repo: CustomerRepository,
        state_machine: InvoiceStateMachine,
        delivery_service: InvoiceDeliveryService,
        access_verifier: AccessVerifier,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.customer_repo = customer_repo
        self.state_machine = state_machine
        self.delivery_service = delivery_service
        self.access_verifier = access_verifier

    async def execute(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return Return.err(not_found(ErrorCode.INVOICE_NOT_FOUND, "Invoice", invoice_id))

            access = await authorize(self.access_verifier, invoice.organization_id, Permission.UPDATE)
            if access.is_err():
                return access

            transitioned = await self.state_machine.transition(
                invoice,
                InvoiceStatus.SENT,
                TransitionTrigger.SEND,
                actor_id=access.value.user_id,
            )
            if transitioned.is_err():
                await self.uow.rollback()
                return transitioned
            invoice = transitioned.value

            await self.uow.commit()

        except Exception:
            await self.uow.rollback()
            logger.exception(f"Failed to send invoice {invoice_id}")
            return Return.err(database_error("send invoice"))

        items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)
        await self._deliver(invoice)
        return Return.ok(InvoiceResponseDTO.from_entity(invoice, items))

    async def _deliver(self, invoice) -> None:
        try:
            customer = await self.customer_repo.get_for_organization(
                invoice.customer_id, invoice.organization_id
            )
            recipient = customer.email if customer else None
            delivered = await self.delivery_service.deliver_invoice(invoice, recipient)
            if not delivered:
                logger.warning(f"Invoice {invoice.invoice_number} was sent but not delivered")
        except Exception as e:
            logger.error(f"Delivery of invoice {invoice.invoice_number} failed: {e}")
