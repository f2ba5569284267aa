"""SQLAlchemy Customer Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer


class SqlAlchemyCustomerRepository(CustomerRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_organization(
        self, customer_id: str, organization_id: str
    ) -> Optional[Customer]:
        statement = (
            select(Customer)
            .where(Customer.id == customer_id)
            .where(Customer.organization_id == organization_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
