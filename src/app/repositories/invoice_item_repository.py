"""Invoice Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_item import InvoiceItem


class InvoiceItemRepository(ABC):
    """
    Repository interface for InvoiceItem persistence

    Items are owned by their invoice and replaced wholesale on edit.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceItem]:
        """
        Retrieve all items for an invoice ordered by position
        """
        pass

    @abstractmethod
    async def replace_for_invoice(self, invoice_id: str, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Delete every existing item of the invoice and persist the given ones

        Returns:
            The newly persisted items
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> None:
        pass
