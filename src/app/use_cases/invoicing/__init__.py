"""Invoicing use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .send_invoice import SendInvoice
from .delete_invoice import DeleteInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .sweep_overdue_invoices import SweepOverdueInvoices
from .dtos import (
    InvoiceItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
    InvoiceItemDTO,
    InvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    InvoiceListResponseDTO,
    DeleteInvoiceResponseDTO,
    SweepResultDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "UpdateInvoiceStatus",
    "SendInvoice",
    "DeleteInvoice",
    "GetInvoice",
    "ListInvoices",
    "SweepOverdueInvoices",
    "InvoiceItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "UpdateInvoiceStatusCommandDTO",
    "InvoiceItemDTO",
    "InvoiceResponseDTO",
    "InvoiceDetailResponseDTO",
    "InvoiceListResponseDTO",
    "DeleteInvoiceResponseDTO",
    "SweepResultDTO",
]
