"""Helpers shared by the invoice write use cases"""

from typing import Any, Dict, List
from .dtos import InvoiceItemInputDTO
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_totals import LineItem


def to_line_items(items: List[InvoiceItemInputDTO]) -> List[LineItem]:
    return [
        LineItem(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for item in items
    ]


def build_invoice_items(invoice_id: str, line_items: List[LineItem]) -> List[InvoiceItem]:
    """Fresh item rows for an invoice, in submitted order"""
    return [
        InvoiceItem(
            invoice_id=invoice_id,
            position=position,
            description=line.description.strip(),
            quantity=line.quantity,
            unit_price=line.unit_price,
            total=line.total,
        )
        for position, line in enumerate(line_items)
    ]


def invoice_audit_data(invoice: Invoice) -> Dict[str, Any]:
    return {
        "invoice_number": invoice.invoice_number,
        "customer_id": invoice.customer_id,
        "currency": invoice.currency,
        "total": invoice.total,
        "total_in_base_currency": invoice.total_in_base_currency,
        "status": invoice.status,
    }
