"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    Payments are created and deleted, never updated.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def list_by_invoice_id(self, invoice_id: str) -> List[Payment]:
        """
        Retrieve payments for an invoice, newest payment_date first
        """
        pass

    @abstractmethod
    async def count_by_invoice_id(self, invoice_id: str) -> int:
        pass

    @abstractmethod
    async def delete(self, payment: Payment) -> None:
        pass
