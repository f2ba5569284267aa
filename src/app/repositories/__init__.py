from .organization_repository import OrganizationRepository
from .organization_member_repository import OrganizationMemberRepository
from .customer_repository import CustomerRepository
from .exchange_rate_repository import ExchangeRateRepository
from .invoice_repository import InvoiceRepository, InvoiceFilters
from .invoice_item_repository import InvoiceItemRepository
from .invoice_sequence_repository import InvoiceSequenceRepository
from .payment_repository import PaymentRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "OrganizationRepository",
    "OrganizationMemberRepository",
    "CustomerRepository",
    "ExchangeRateRepository",
    "InvoiceRepository",
    "InvoiceFilters",
    "InvoiceItemRepository",
    "InvoiceSequenceRepository",
    "PaymentRepository",
    "AuditLogRepository",
]
