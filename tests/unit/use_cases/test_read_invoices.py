"""Unit tests for GetInvoice and ListInvoices use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.repositories.invoice_repository import InvoiceFilters
from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.list_invoices import ListInvoices
from src.domain.invoice import InvoiceStatus
from tests.fixtures.factories import ORG_ID, make_invoice, make_payment


@pytest.mark.asyncio
class TestGetInvoice:

    async def test_returns_invoice_with_payment_summary(self, mock_invoice_repo, access_verifier):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.SENT))
        item_repo = MagicMock()
        item_repo.get_by_invoice_id = AsyncMock(return_value=[])
        payment_repo = MagicMock()
        payment_repo.list_by_invoice_id = AsyncMock(
            return_value=[make_payment(amount=Decimal("18.00"))]
        )

        result = await GetInvoice(mock_invoice_repo, item_repo, payment_repo, access_verifier).execute(
            "inv_1"
        )

        assert result.is_ok()
        assert result.value.invoice.invoice_number == "INV-2024-0001"
        assert result.value.payment_summary.total_paid == Decimal("18.00")
        assert result.value.payment_summary.remaining_amount == Decimal("100.00")
        assert result.value.payment_summary.is_fully_paid is False

    async def test_unknown_invoice(self, mock_invoice_repo, access_verifier):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetInvoice(mock_invoice_repo, MagicMock(), MagicMock(), access_verifier).execute(
            "inv_missing"
        )

        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestListInvoices:

    async def test_page_size_is_clamped(self, mock_invoice_repo, access_verifier):
        mock_invoice_repo.list_by_organization = AsyncMock(return_value=[make_invoice()])
        filters = InvoiceFilters(status=InvoiceStatus.DRAFT)

        result = await ListInvoices(mock_invoice_repo, access_verifier).execute(
            ORG_ID, filters=filters, limit=500, offset=-3
        )

        assert result.value.limit == 100
        assert result.value.offset == 0
        assert len(result.value.invoices) == 1
        mock_invoice_repo.list_by_organization.assert_called_once_with(
            ORG_ID, filters=filters, limit=100, offset=0
        )
