"""Customer Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    async def get_for_organization(
        self, customer_id: str, organization_id: str
    ) -> Optional[Customer]:
        """
        Retrieve a customer only if it belongs to the organization

        Returns:
            Customer if found in the organization, None otherwise
        """
        pass
