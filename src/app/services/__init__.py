from .unit_of_work import UnitOfWork
from .clock import Clock
from .access_verifier import AccessVerifier, AccessDeniedError, OrganizationAccess, authorize
from .audit_service import AuditService
from .invoice_delivery_service import InvoiceDeliveryService
from .currency_snapshot_resolver import CurrencySnapshotResolver, CurrencySnapshot
from .invoice_state_machine import InvoiceStateMachine

__all__ = [
    "UnitOfWork",
    "Clock",
    "AccessVerifier",
    "AccessDeniedError",
    "OrganizationAccess",
    "authorize",
    "AuditService",
    "InvoiceDeliveryService",
    "CurrencySnapshotResolver",
    "CurrencySnapshot",
    "InvoiceStateMachine",
]
