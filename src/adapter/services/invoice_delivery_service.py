"""Invoice Delivery Service Implementations

Provides concrete channels for invoices that have just been sent.
"""

import logging
from typing import Optional
import httpx
from src.app.services.invoice_delivery_service import InvoiceDeliveryService
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


class LoggingInvoiceDeliveryService(InvoiceDeliveryService):
    """
    Delivery channel that logs the hand-off

    Default channel, and the fallback when no webhook is configured.
    """

    async def deliver_invoice(self, invoice: Invoice, recipient: Optional[str]) -> bool:
        logger.info(
            f"[INVOICE SENT] {invoice.invoice_number} "
            f"Organization: {invoice.organization_id}, "
            f"Customer: {invoice.customer_id}, "
            f"Recipient: {recipient or 'unknown'}, "
            f"Total: {invoice.total} {invoice.currency}, "
            f"Due: {invoice.due_date.isoformat()}"
        )
        return True


class WebhookInvoiceDeliveryService(InvoiceDeliveryService):
    """
    Delivery channel that POSTs the invoice to an HTTP webhook

    The receiver renders and emails the invoice.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook delivery

        Args:
            webhook_url: URL to POST sent invoices to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def deliver_invoice(self, invoice: Invoice, recipient: Optional[str]) -> bool:
        payload = {
            "type": "invoice_sent",
            "invoice_id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "organization_id": invoice.organization_id,
            "customer_id": invoice.customer_id,
            "recipient": recipient,
            "currency": invoice.currency,
            "total": str(invoice.total),
            "issue_date": invoice.issue_date.isoformat(),
            "due_date": invoice.due_date.isoformat(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Invoice {invoice.invoice_number} delivered to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(f"Webhook delivery failed for invoice {invoice.invoice_number}: {e}")
            return False


class CompositeInvoiceDeliveryService(InvoiceDeliveryService):
    """Delivers through every configured channel"""

    def __init__(self, services: list[InvoiceDeliveryService]):
        self.services = services

    async def deliver_invoice(self, invoice: Invoice, recipient: Optional[str]) -> bool:
        """
        Returns:
            True if at least one channel accepted the invoice
        """
        delivered = False
        for service in self.services:
            try:
                if await service.deliver_invoice(invoice, recipient):
                    delivered = True
            except Exception as e:
                logger.error(f"Delivery channel {type(service).__name__} failed: {e}")
        return delivered


def create_invoice_delivery_service(webhook_url: Optional[str] = None) -> InvoiceDeliveryService:
    """
    Build the delivery channel from configuration

    Args:
        webhook_url: Optional webhook URL. When set, invoices are logged and
                     posted to the webhook; otherwise only logged.
    """
    services: list[InvoiceDeliveryService] = [LoggingInvoiceDeliveryService()]

    if webhook_url:
        services.append(WebhookInvoiceDeliveryService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeInvoiceDeliveryService(services)
