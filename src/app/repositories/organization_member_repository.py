"""Organization Member Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.organization_member import OrganizationMember


class OrganizationMemberRepository(ABC):

    @abstractmethod
    async def get_membership(
        self, organization_id: str, user_id: str
    ) -> Optional[OrganizationMember]:
        """
        Retrieve a user's membership in an organization

        Returns:
            OrganizationMember if the user belongs to the organization, None otherwise
        """
        pass
