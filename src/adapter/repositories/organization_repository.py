"""SQLAlchemy Organization Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.organization_repository import OrganizationRepository
from src.domain.organization import Organization


class SqlAlchemyOrganizationRepository(OrganizationRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: str) -> Optional[Organization]:
        statement = select(Organization).where(Organization.id == organization_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, organization: Organization) -> Organization:
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def update(self, organization: Organization) -> Organization:
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization
