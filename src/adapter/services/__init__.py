from .unit_of_work import SqlAlchemyUnitOfWork
from .clock import SystemClock
from .access_verifier import MembershipAccessVerifier
from .invoice_delivery_service import (
    LoggingInvoiceDeliveryService,
    WebhookInvoiceDeliveryService,
    CompositeInvoiceDeliveryService,
    create_invoice_delivery_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SystemClock",
    "MembershipAccessVerifier",
    "LoggingInvoiceDeliveryService",
    "WebhookInvoiceDeliveryService",
    "CompositeInvoiceDeliveryService",
    "create_invoice_delivery_service",
]
