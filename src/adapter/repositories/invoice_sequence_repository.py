"""SQLAlchemy Invoice Sequence Repository Implementation

Invoice numbers come from a counter row per (organization, year) that is
advanced with a compare-and-swap UPDATE, so concurrent creates in the same
organization never read the same value.
"""

import logging
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.domain.invoice_sequence import InvoiceSequence

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10


class InvoiceSequenceExhaustedError(Exception):
    """Raised when the counter could not be advanced within MAX_ATTEMPTS"""


class SqlAlchemyInvoiceSequenceRepository(InvoiceSequenceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_value(self, organization_id: str, year: int) -> int:
        """
        Advance the (organization, year) counter and return the new value

        Flow:
        1. Read last_value
        2. No row: insert last_value=1 inside a savepoint; a unique violation
           means another transaction created it first, so retry
        3. UPDATE ... SET last_value = seen + 1 WHERE last_value = seen;
           zero rows updated means another transaction advanced it, so retry
        """
        for attempt in range(1, MAX_ATTEMPTS + 1):
            statement = (
                select(InvoiceSequence.last_value)
                .where(InvoiceSequence.organization_id == organization_id)
                .where(InvoiceSequence.year == year)
            )
            result = await self.session.execute(statement)
            seen = result.scalar_one_or_none()

            if seen is None:
                try:
                    async with self.session.begin_nested():
                        self.session.add(
                            InvoiceSequence(organization_id=organization_id, year=year, last_value=1)
                        )
                        await self.session.flush()
                    return 1
                except IntegrityError:
                    logger.debug(
                        f"Invoice counter for {organization_id}/{year} created concurrently, "
                        f"retrying (attempt {attempt})"
                    )
                    continue

            swap = (
                update(InvoiceSequence)
                .where(InvoiceSequence.organization_id == organization_id)
                .where(InvoiceSequence.year == year)
                .where(InvoiceSequence.last_value == seen)
                .values(last_value=seen + 1)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(swap)
            if result.rowcount == 1:
                return seen + 1

            logger.debug(
                f"Invoice counter for {organization_id}/{year} moved past {seen}, "
                f"retrying (attempt {attempt})"
            )

        raise InvoiceSequenceExhaustedError(
            f"Could not allocate an invoice number for {organization_id}/{year} "
            f"after {MAX_ATTEMPTS} attempts"
        )
