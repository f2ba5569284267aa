"""Payment use cases"""
from .create_payment import CreatePayment
from .delete_payment import DeletePayment
from .get_payment_summary import GetPaymentSummary
from .list_invoice_payments import ListInvoicePayments
from .dtos import (
    CreatePaymentCommandDTO,
    PaymentResponseDTO,
    PaymentSummaryDTO,
    CreatePaymentResponseDTO,
    DeletePaymentResponseDTO,
    PaymentListResponseDTO,
)

__all__ = [
    "CreatePayment",
    "DeletePayment",
    "GetPaymentSummary",
    "ListInvoicePayments",
    "CreatePaymentCommandDTO",
    "PaymentResponseDTO",
    "PaymentSummaryDTO",
    "CreatePaymentResponseDTO",
    "DeletePaymentResponseDTO",
    "PaymentListResponseDTO",
]
