"""Organization Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.organization import Organization


class OrganizationRepository(ABC):

    @abstractmethod
    async def get_by_id(self, organization_id: str) -> Optional[Organization]:
        """
        Retrieve organization by ID

        Returns:
            Organization if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        pass

    @abstractmethod
    async def update(self, organization: Organization) -> Organization:
        pass
