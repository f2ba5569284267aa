from .organization_repository import SqlAlchemyOrganizationRepository
from .organization_member_repository import SqlAlchemyOrganizationMemberRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .exchange_rate_repository import SqlAlchemyExchangeRateRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository
from .invoice_sequence_repository import SqlAlchemyInvoiceSequenceRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .audit_log_repository import SqlAlchemyAuditLogRepository

__all__ = [
    "SqlAlchemyOrganizationRepository",
    "SqlAlchemyOrganizationMemberRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyExchangeRateRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
    "SqlAlchemyInvoiceSequenceRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyAuditLogRepository",
]
