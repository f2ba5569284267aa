"""Invoice Sequence Repository Interface"""

from abc import ABC, abstractmethod


class InvoiceSequenceRepository(ABC):

    @abstractmethod
    async def next_value(self, organization_id: str, year: int) -> int:
        """
        Atomically advance and return the invoice counter for (organization, year)

        The first call for a given year returns 1. Concurrent callers never
        receive the same value.
        """
        pass
