"""Base-currency resolution shared by the reports"""

from decimal import Decimal
from typing import Optional
from src.domain.invoice import Invoice


def resolve_base_amount(invoice: Invoice, base_currency: str) -> Optional[Decimal]:
    """
    Amount of an invoice in the organization's base currency

    Uses the frozen snapshot when present, the raw total when the invoice is
    already in the base currency, and None otherwise. None is never replaced
    by an approximation; callers report the currency as missing.
    """
    if invoice.total_in_base_currency is not None:
        return invoice.total_in_base_currency
    if invoice.currency == base_currency:
        return invoice.total
    return None
