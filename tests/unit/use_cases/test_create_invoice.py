"""Unit tests for CreateInvoice use case

Tests cover:
- Draft created with computed totals and a numbered, snapshotted invoice
- Missing currency snapshot is a valid state
- Customer and validation failures abort before numbering
- Access denial
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.access_verifier import AccessDeniedError
from src.app.services.currency_snapshot_resolver import CurrencySnapshot, MISSING_SNAPSHOT
from src.app.use_cases.invoicing.create_invoice import CreateInvoice
from src.app.use_cases.invoicing.dtos import CreateInvoiceCommandDTO, InvoiceItemInputDTO
from src.domain.audit_log import AuditAction
from src.domain.customer import Customer
from src.domain.invoice import DiscountType
from tests.fixtures.factories import CUSTOMER_ID, ORG_ID, USER_ID, make_organization


@pytest.fixture
def mock_organization_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_organization())
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_for_organization = AsyncMock(
        return_value=Customer(id=CUSTOMER_ID, organization_id=ORG_ID, name="Globex")
    )
    return repo


@pytest.fixture
def mock_invoice_repo(mock_invoice_repo):
    mock_invoice_repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    return mock_invoice_repo


@pytest.fixture
def mock_item_repo():
    repo = MagicMock()
    repo.replace_for_invoice = AsyncMock(side_effect=lambda invoice_id, items: items)
    return repo


@pytest.fixture
def mock_sequence_repo():
    repo = MagicMock()
    repo.next_value = AsyncMock(return_value=7)
    return repo


@pytest.fixture
def mock_snapshot_resolver():
    resolver = MagicMock()
    resolver.execute = AsyncMock(
        return_value=CurrencySnapshot(
            exchange_rate_to_base=Decimal("1.085000"),
            total_in_base_currency=Decimal("115.23"),
        )
    )
    return resolver


@pytest.fixture
def create_invoice_use_case(
    mock_uow,
    mock_organization_repo,
    mock_customer_repo,
    mock_invoice_repo,
    mock_item_repo,
    mock_sequence_repo,
    mock_snapshot_resolver,
    access_verifier,
    mock_audit,
    clock,
):
    return CreateInvoice(
        uow=mock_uow,
        organization_repo=mock_organization_repo,
        customer_repo=mock_customer_repo,
        invoice_repo=mock_invoice_repo,
        invoice_item_repo=mock_item_repo,
        sequence_repo=mock_sequence_repo,
        snapshot_resolver=mock_snapshot_resolver,
        access_verifier=access_verifier,
        audit=mock_audit,
        clock=clock,
    )


@pytest.fixture
def sample_command():
    """EUR invoice: 2 x 50.00, 10% discount, 18% tax"""
    return CreateInvoiceCommandDTO(
        organization_id=ORG_ID,
        customer_id=CUSTOMER_ID,
        currency="eur",
        issue_date=date(2024, 4, 1),
        due_date=date(2024, 5, 1),
        tax_rate=Decimal("18"),
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("10"),
        items=[InvoiceItemInputDTO(description="Consulting", quantity=Decimal("2"), unit_price=Decimal("50.00"))],
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:

    async def test_creates_draft_with_totals_and_number(
        self, create_invoice_use_case, sample_command, mock_sequence_repo, mock_uow
    ):
        """
        Given: A valid EUR command on 2024-04-10
        When: CreateInvoice is executed
        Then: Draft invoice INV-2024-0007 with computed totals and snapshot
        """
        # Act
        result = await create_invoice_use_case.execute(sample_command)

        # Assert
        assert result.is_ok()
        invoice = result.value
        assert invoice.invoice_number == "INV-2024-0007"
        assert invoice.status == "draft"
        assert invoice.currency == "EUR"
        assert invoice.subtotal == Decimal("100.00")
        assert invoice.discount_amount == Decimal("10.00")
        assert invoice.tax_amount == Decimal("16.20")
        assert invoice.total == Decimal("106.20")
        assert invoice.exchange_rate_to_base == Decimal("1.085000")
        assert invoice.total_in_base_currency == Decimal("115.23")
        assert [item.total for item in invoice.items] == [Decimal("100.00")]
        mock_sequence_repo.next_value.assert_called_once_with(ORG_ID, 2024)
        mock_uow.commit.assert_called_once()

    async def test_number_year_comes_from_clock_not_issue_date(
        self, create_invoice_use_case, sample_command, mock_sequence_repo
    ):
        sample_command.issue_date = date(2023, 12, 28)

        result = await create_invoice_use_case.execute(sample_command)

        assert result.value.invoice_number.startswith("INV-2024-")
        mock_sequence_repo.next_value.assert_called_once_with(ORG_ID, 2024)

    async def test_missing_rate_still_creates_invoice(
        self, create_invoice_use_case, sample_command, mock_snapshot_resolver
    ):
        mock_snapshot_resolver.execute = AsyncMock(return_value=MISSING_SNAPSHOT)

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_ok()
        assert result.value.exchange_rate_to_base is None
        assert result.value.total_in_base_currency is None

    async def test_audit_entry_recorded(self, create_invoice_use_case, sample_command, mock_audit):
        await create_invoice_use_case.execute(sample_command)

        kwargs = mock_audit.record.call_args.kwargs
        assert kwargs["action"] == AuditAction.CREATE
        assert kwargs["actor_id"] == USER_ID
        assert kwargs["new_data"]["invoice_number"] == "INV-2024-0007"


@pytest.mark.asyncio
class TestCreateInvoiceFailures:

    async def test_unknown_customer(
        self, create_invoice_use_case, sample_command, mock_customer_repo, mock_sequence_repo
    ):
        mock_customer_repo.get_for_organization = AsyncMock(return_value=None)

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "CUSTOMER_NOT_FOUND"
        mock_sequence_repo.next_value.assert_not_called()

    async def test_invalid_items_do_not_consume_a_number(
        self, create_invoice_use_case, sample_command, mock_sequence_repo, mock_uow
    ):
        sample_command.items = [
            InvoiceItemInputDTO(description="Bad", quantity=Decimal("0"), unit_price=Decimal("10"))
        ]

        result = await create_invoice_use_case.execute(sample_command)

        assert result.error.code == "VALIDATION_ERROR"
        assert "items.0.quantity" in result.error.details
        mock_sequence_repo.next_value.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_access_denied(self, create_invoice_use_case, sample_command, access_verifier):
        access_verifier.verify_access = AsyncMock(
            side_effect=AccessDeniedError("UNAUTHORIZED", "Not a member")
        )

        result = await create_invoice_use_case.execute(sample_command)

        assert result.error.code == "UNAUTHORIZED"

    async def test_persistence_failure_rolls_back(
        self, create_invoice_use_case, sample_command, mock_invoice_repo, mock_uow
    ):
        mock_invoice_repo.create = AsyncMock(side_effect=RuntimeError("unique violation on invoices"))

        result = await create_invoice_use_case.execute(sample_command)

        assert result.error.code == "DATABASE_ERROR"
        assert "unique violation" not in result.error.message
        mock_uow.rollback.assert_called_once()
