"""SweepOverdueInvoices Use Case

Moves sent invoices past their due date to overdue. Used interactively for
one organization and by the daily worker for all organizations.
"""

import logging
import time
from typing import List, Optional
from libs.result import Result, Return
from src.app.errors import database_error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.access_verifier import AccessVerifier, authorize
from src.app.services.clock import Clock
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from src.domain.organization_member import Permission
from .dtos import SweepResultDTO

logger = logging.getLogger(__name__)


class SweepOverdueInvoices:
    """
    Use Case: Overdue sweep

    Business Rules:
    1. Candidates are sent invoices with due_date < today (date only)
    2. Each invoice is re-read under lock and re-checked before transition
    3. Each transition commits on its own; one failure does not stop the batch
    4. Idempotent: overdue invoices are not candidates, so a second run
       transitions nothing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        state_machine: InvoiceStateMachine,
        access_verifier: Optional[AccessVerifier],
        clock: Clock,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.state_machine = state_machine
        self.access_verifier = access_verifier
        self.clock = clock

    async def execute_for_organization(self, organization_id: str) -> Result[SweepResultDTO]:
        """
        Sweep one organization on behalf of the acting user (update permission)
        """
        access = await authorize(self.access_verifier, organization_id, Permission.UPDATE)
        if access.is_err():
            return access
        return await self._sweep(organization_id, actor_id=access.value.user_id)

    async def execute_all(self) -> Result[SweepResultDTO]:
        """
        Sweep every organization; no user context
        """
        return await self._sweep(None, actor_id=None)

    async def _sweep(
        self, organization_id: Optional[str], actor_id: Optional[str]
    ) -> Result[SweepResultDTO]:
        start_time = time.time()
        today = self.clock.today()
        scope = f"organization {organization_id}" if organization_id else "all organizations"

        try:
            candidates = await self.invoice_repo.list_overdue_candidates(today, organization_id)
        except Exception:
            logger.exception(f"Overdue sweep failed to load candidates for {scope}")
            return Return.err(database_error("load overdue candidates"))

        logger.info(f"Overdue sweep for {scope}: {len(candidates)} candidates due before {today}")

        transitioned: List[str] = []
        failed = 0

        candidate_ids = [candidate.id for candidate in candidates]

        for invoice_id in candidate_ids:
            try:
                invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
                if (
                    invoice is None
                    or invoice.status != InvoiceStatus.SENT
                    or not invoice.due_date < today
                ):
                    # Changed since the candidate query
                    await self.uow.rollback()
                    continue

                result = await self.state_machine.transition(
                    invoice,
                    InvoiceStatus.OVERDUE,
                    TransitionTrigger.OVERDUE_SWEEP,
                    actor_id=actor_id,
                )
                if result.is_err():
                    await self.uow.rollback()
                    failed += 1
                    logger.warning(
                        f"Overdue sweep skipped invoice {invoice_id}: {result.error.message}"
                    )
                    continue

                await self.uow.commit()
                transitioned.append(invoice_id)

            except Exception:
                await self.uow.rollback()
                failed += 1
                logger.exception(f"Overdue sweep failed for invoice {invoice_id}")

        execution_time_ms = int((time.time() - start_time) * 1000)

        if failed:
            logger.warning(
                f"Overdue sweep for {scope} complete: {len(transitioned)} transitioned, "
                f"{failed} failed in {execution_time_ms}ms"
            )
        else:
            logger.info(
                f"Overdue sweep for {scope} complete: {len(transitioned)} transitioned "
                f"in {execution_time_ms}ms"
            )

        return Return.ok(
            SweepResultDTO(
                organization_id=organization_id,
                sweep_date=today,
                candidates_found=len(candidates),
                invoices_transitioned=len(transitioned),
                failed_transitions=failed,
                transitioned_invoice_ids=transitioned,
                execution_time_ms=execution_time_ms,
            )
        )
