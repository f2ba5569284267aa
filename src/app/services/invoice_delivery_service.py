"""Invoice Delivery Service Interface

Defines the contract for handing a sent invoice to an outbound channel.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice import Invoice


class InvoiceDeliveryService(ABC):
    """
    Abstract delivery channel for sent invoices

    Implementations can deliver via:
    - Email with rendered PDF
    - Customer portal notification
    - Logging only (development)
    """

    @abstractmethod
    async def deliver_invoice(self, invoice: Invoice, recipient: Optional[str]) -> bool:
        """
        Deliver an invoice that has just been sent

        Args:
            invoice: Invoice in SENT status
            recipient: Customer address, if known

        Returns:
            True if the channel accepted the invoice, False otherwise
        """
        pass
