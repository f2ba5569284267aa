"""SQLAlchemy Payment Repository Implementation"""

from typing import List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        statement = select(Payment).where(Payment.id == payment_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_invoice_id(self, invoice_id: str) -> List[Payment]:
        """
        Retrieve payments for an invoice

        Returns:
            Payments ordered by payment_date, newest first
        """
        statement = (
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date.desc(), Payment.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_invoice_id(self, invoice_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(Payment)
            .where(Payment.invoice_id == invoice_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def delete(self, payment: Payment) -> None:
        await self.session.delete(payment)
        await self.session.flush()
