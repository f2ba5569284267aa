"""SQLAlchemy Exchange Rate Repository Implementation"""

from datetime import date
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.exchange_rate_repository import ExchangeRateRepository
from src.domain.exchange_rate import ExchangeRate


class SqlAlchemyExchangeRateRepository(ExchangeRateRepository):
    """
    SQLAlchemy implementation of ExchangeRateRepository

    Reads never lock; a rate written concurrently with an invoice is simply
    not seen by that invoice's snapshot.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_latest(
        self, organization_id: str, from_currency: str, to_currency: str
    ) -> Optional[ExchangeRate]:
        statement = (
            select(ExchangeRate)
            .where(ExchangeRate.organization_id == organization_id)
            .where(ExchangeRate.from_currency == from_currency)
            .where(ExchangeRate.to_currency == to_currency)
            .order_by(ExchangeRate.effective_date.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_for_day(
        self,
        organization_id: str,
        from_currency: str,
        to_currency: str,
        effective_date: date,
    ) -> Optional[ExchangeRate]:
        statement = (
            select(ExchangeRate)
            .where(ExchangeRate.organization_id == organization_id)
            .where(ExchangeRate.from_currency == from_currency)
            .where(ExchangeRate.to_currency == to_currency)
            .where(ExchangeRate.effective_date == effective_date)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_current(self, organization_id: str, to_currency: str) -> List[ExchangeRate]:
        statement = (
            select(ExchangeRate)
            .where(ExchangeRate.organization_id == organization_id)
            .where(ExchangeRate.to_currency == to_currency)
            .order_by(ExchangeRate.from_currency.asc(), ExchangeRate.effective_date.desc())
        )
        result = await self.session.execute(statement)

        current: List[ExchangeRate] = []
        seen = set()
        for rate in result.scalars().all():
            if rate.from_currency in seen:
                continue
            seen.add(rate.from_currency)
            current.append(rate)
        return current

    async def get_by_id(self, exchange_rate_id: str) -> Optional[ExchangeRate]:
        statement = select(ExchangeRate).where(ExchangeRate.id == exchange_rate_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, exchange_rate: ExchangeRate) -> ExchangeRate:
        self.session.add(exchange_rate)
        await self.session.flush()
        await self.session.refresh(exchange_rate)
        return exchange_rate

    async def update(self, exchange_rate: ExchangeRate) -> ExchangeRate:
        self.session.add(exchange_rate)
        await self.session.flush()
        await self.session.refresh(exchange_rate)
        return exchange_rate

    async def delete(self, exchange_rate: ExchangeRate) -> None:
        await self.session.delete(exchange_rate)
        await self.session.flush()
