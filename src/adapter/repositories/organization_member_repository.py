"""SQLAlchemy Organization Member Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.organization_member_repository import OrganizationMemberRepository
from src.domain.organization_member import OrganizationMember


class SqlAlchemyOrganizationMemberRepository(OrganizationMemberRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_membership(
        self, organization_id: str, user_id: str
    ) -> Optional[OrganizationMember]:
        statement = (
            select(OrganizationMember)
            .where(OrganizationMember.organization_id == organization_id)
            .where(OrganizationMember.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
