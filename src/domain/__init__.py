from .base import BaseModel, generate_uuid
from .organization import Organization
from .organization_member import OrganizationMember, MemberRole, Permission
from .customer import Customer
from .exchange_rate import ExchangeRate
from .invoice import Invoice, InvoiceStatus, DiscountType
from .invoice_item import InvoiceItem
from .invoice_sequence import InvoiceSequence
from .payment import Payment, PaymentMethod
from .audit_log import AuditLog, AuditAction, AuditEntityType

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Organization",
    "OrganizationMember",
    "MemberRole",
    "Permission",
    "Customer",
    "ExchangeRate",
    "Invoice",
    "InvoiceStatus",
    "DiscountType",
    "InvoiceItem",
    "InvoiceSequence",
    "Payment",
    "PaymentMethod",
    "AuditLog",
    "AuditAction",
    "AuditEntityType",
]
