"""Integration tests for the invoice lifecycle

Tests cover:
- Create, edit, send, pay, reverse and sweep against a real database
- Invoice numbering per organization and year
- Audit entries written with each change
"""

import pytest
from datetime import date
from decimal import Decimal

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    InvoiceItemInputDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.app.use_cases.payments.dtos import CreatePaymentCommandDTO
from src.domain.audit_log import AuditAction, AuditLog
from src.domain.invoice import DiscountType, Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.money import round2
from src.domain.payment import PaymentMethod
from tests.fixtures.factories import CUSTOMER_ID, MEMBER_USER_ID, ORG_ID, OTHER_CUSTOMER_ID, USER_ID


def create_command(**overrides) -> CreateInvoiceCommandDTO:
    fields = dict(
        organization_id=ORG_ID,
        customer_id=CUSTOMER_ID,
        currency="USD",
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        tax_rate=Decimal("18"),
        items=[InvoiceItemInputDTO(description="Consulting", quantity=Decimal("2"), unit_price=Decimal("50"))],
    )
    fields.update(overrides)
    return CreateInvoiceCommandDTO(**fields)


def payment_command(invoice_id: str, amount: str) -> CreatePaymentCommandDTO:
    return CreatePaymentCommandDTO(
        invoice_id=invoice_id,
        amount=Decimal(amount),
        payment_date=date(2024, 4, 10),
        method=PaymentMethod.BANK_TRANSFER,
    )


async def create_sent_invoice(use_cases, **overrides) -> str:
    created = await use_cases().create_invoice().execute(create_command(**overrides))
    invoice_id = created.value.invoice_id
    sent = await use_cases().send_invoice().execute(invoice_id)
    assert sent.is_ok()
    return invoice_id


@pytest.mark.asyncio
class TestInvoiceCreationIntegration:

    async def test_end_to_end_invoice_creation(self, use_cases, db_session: AsyncSession):
        """
        Test complete flow: create invoice, verify database state
        """
        # Act
        result = await use_cases().create_invoice().execute(create_command())

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.invoice_number == "INV-2024-0001"
        assert response.status == "draft"
        assert response.total == Decimal("118.00")
        assert response.exchange_rate_to_base == Decimal("1")
        assert response.total_in_base_currency == Decimal("118.00")

        invoice = await db_session.get(Invoice, response.invoice_id)
        assert invoice.status == InvoiceStatus.DRAFT
        items = (await db_session.exec(
            select(InvoiceItem).where(InvoiceItem.invoice_id == response.invoice_id)
        )).all()
        assert [item.total for item in items] == [Decimal("100.00")]

        audit = (await db_session.exec(
            select(AuditLog).where(AuditLog.entity_id == response.invoice_id)
        )).all()
        assert [entry.action for entry in audit] == [AuditAction.CREATE]
        assert audit[0].actor_id == USER_ID

    async def test_invoice_numbers_are_sequential(self, use_cases):
        numbers = []
        for _ in range(3):
            result = await use_cases().create_invoice().execute(create_command())
            numbers.append(result.value.invoice_number)

        assert numbers == ["INV-2024-0001", "INV-2024-0002", "INV-2024-0003"]

    async def test_numbering_restarts_each_year(self, use_cases, clock):
        await use_cases().create_invoice().execute(create_command())
        clock.set(clock.now().replace(year=2025))

        result = await use_cases().create_invoice().execute(create_command())

        assert result.value.invoice_number == "INV-2025-0001"

    async def test_customer_of_another_organization_rejected(self, use_cases):
        result = await use_cases().create_invoice().execute(create_command(customer_id=OTHER_CUSTOMER_ID))

        assert result.error.code == "CUSTOMER_NOT_FOUND"

    async def test_member_can_create_but_not_delete(self, use_cases):
        created = await use_cases(MEMBER_USER_ID).create_invoice().execute(
            create_command()
        )
        assert created.is_ok()

        deleted = await use_cases(MEMBER_USER_ID).delete_invoice().execute(
            created.value.invoice_id
        )

        assert deleted.error.code == "FORBIDDEN"

    async def test_outsider_is_unauthorized(self, use_cases):
        result = await use_cases("user_stranger").create_invoice().execute(
            create_command()
        )

        assert result.error.code == "UNAUTHORIZED"


@pytest.mark.asyncio
class TestPersistedTotalsIntegration:

    async def test_reloaded_invoice_satisfies_totals_invariants(
        self, use_cases, db_session: AsyncSession
    ):
        """
        Given: fractional quantities, a fractional tax rate and a percentage discount
        When: the invoice is created and re-read from the database
        Then: the stored inputs reproduce every stored derived amount
        """
        # Arrange
        command = create_command(
            tax_rate=Decimal("7.25"),
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("12.5"),
            items=[
                InvoiceItemInputDTO(description="Hosting", quantity=Decimal("0.5"), unit_price=Decimal("19.99")),
                InvoiceItemInputDTO(description="Support", quantity=Decimal("3"), unit_price=Decimal("0.99")),
            ],
        )

        # Act
        result = await use_cases().create_invoice().execute(command)
        db_session.expire_all()
        invoice = (await db_session.exec(
            select(Invoice).where(Invoice.id == result.value.invoice_id)
        )).one()
        items = (await db_session.exec(
            select(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id).order_by(InvoiceItem.position)
        )).all()

        # Assert
        assert all(item.quantity > 0 for item in items)
        for item in items:
            assert item.total == round2(item.quantity * item.unit_price)
        assert invoice.subtotal == round2(sum(item.quantity * item.unit_price for item in items))
        assert invoice.discount_amount == round2(invoice.subtotal * invoice.discount_value / 100)
        assert invoice.tax_amount == round2(
            (invoice.subtotal - invoice.discount_amount) * invoice.tax_rate / 100
        )
        assert invoice.total == invoice.subtotal - invoice.discount_amount + invoice.tax_amount
        assert (invoice.subtotal, invoice.discount_amount, invoice.tax_amount, invoice.total) == (
            Decimal("12.97"), Decimal("1.62"), Decimal("0.82"), Decimal("12.17")
        )

    async def test_sub_cent_inputs_leave_no_rows(self, use_cases, db_session: AsyncSession):
        command = create_command(
            tax_rate=Decimal("7.125"),
            items=[
                InvoiceItemInputDTO(description="Rounding", quantity=Decimal("0.001"), unit_price=Decimal("1000")),
                InvoiceItemInputDTO(description="Consulting", quantity=Decimal("1"), unit_price=Decimal("1000")),
            ],
        )

        result = await use_cases().create_invoice().execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        assert set(result.error.details) == {"items.0.quantity", "tax_rate"}
        assert (await db_session.exec(select(Invoice))).all() == []


@pytest.mark.asyncio
class TestDraftEditingIntegration:

    async def test_edit_replaces_items_and_recomputes(self, use_cases, db_session: AsyncSession):
        created = await use_cases().create_invoice().execute(create_command())
        invoice_id = created.value.invoice_id

        result = await use_cases().update_invoice().execute(
            UpdateInvoiceCommandDTO(
                invoice_id=invoice_id,
                customer_id=CUSTOMER_ID,
                currency="USD",
                issue_date=date(2024, 3, 1),
                due_date=date(2024, 3, 31),
                tax_rate=Decimal("0"),
                items=[
                    InvoiceItemInputDTO(description="Design", quantity=Decimal("1"), unit_price=Decimal("10")),
                    InvoiceItemInputDTO(description="Hosting", quantity=Decimal("3"), unit_price=Decimal("5")),
                ],
            )
        )

        assert result.value.total == Decimal("25.00")
        assert result.value.invoice_number == created.value.invoice_number
        items = (await db_session.exec(
            select(InvoiceItem).where(InvoiceItem.invoice_id == invoice_id).order_by(InvoiceItem.position)
        )).all()
        assert [item.description for item in items] == ["Design", "Hosting"]

    async def test_sent_invoice_cannot_be_edited(self, use_cases):
        invoice_id = await create_sent_invoice(use_cases)

        result = await use_cases().update_invoice().execute(
            UpdateInvoiceCommandDTO(
                invoice_id=invoice_id,
                customer_id=CUSTOMER_ID,
                currency="USD",
                issue_date=date(2024, 3, 1),
                due_date=date(2024, 3, 31),
                items=[InvoiceItemInputDTO(description="x", quantity=Decimal("1"), unit_price=Decimal("1"))],
            )
        )

        assert result.error.code == "CANNOT_EDIT"


@pytest.mark.asyncio
class TestPaymentReconciliationIntegration:

    async def test_partial_then_full_payment_marks_paid(self, use_cases, db_session: AsyncSession):
        invoice_id = await create_sent_invoice(use_cases, due_date=date(2024, 5, 1))

        first = await use_cases().create_payment().execute(payment_command(invoice_id, "100.00"))
        assert first.value.invoice_status == "sent"

        second = await use_cases().create_payment().execute(payment_command(invoice_id, "18.00"))
        assert second.value.invoice_status == "paid"
        assert second.value.summary.is_fully_paid is True

        invoice = await db_session.get(Invoice, invoice_id)
        assert invoice.status == InvoiceStatus.PAID

    async def test_overpayment_rejected(self, use_cases):
        invoice_id = await create_sent_invoice(use_cases, due_date=date(2024, 5, 1))

        result = await use_cases().create_payment().execute(payment_command(invoice_id, "118.02"))

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.reason == "remaining=118.00"

    async def test_reversal_of_past_due_invoice_lands_overdue(self, use_cases):
        """
        Given: An invoice due 2024-03-31 paid in full
        When: The payment is deleted on 2024-04-10
        Then: The invoice is overdue
        """
        invoice_id = await create_sent_invoice(use_cases)
        paid = await use_cases().create_payment().execute(payment_command(invoice_id, "118.00"))
        assert paid.value.invoice_status == "paid"

        result = await use_cases().delete_payment().execute(paid.value.payment.payment_id)

        assert result.value.invoice_status == "overdue"
        assert result.value.summary.payment_count == 0

    async def test_payment_on_draft_rejected(self, use_cases):
        created = await use_cases().create_invoice().execute(create_command())

        result = await use_cases().create_payment().execute(
            payment_command(created.value.invoice_id, "10.00")
        )

        assert result.error.code == "PAYMENT_NOT_ALLOWED"


@pytest.mark.asyncio
class TestStatusAndDeletionIntegration:

    async def test_cancelled_invoice_with_payments_cannot_be_deleted(self, use_cases):
        invoice_id = await create_sent_invoice(use_cases, due_date=date(2024, 5, 1))
        await use_cases().create_payment().execute(payment_command(invoice_id, "10.00"))
        cancelled = await use_cases().update_invoice_status().execute(
            UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, status=InvoiceStatus.CANCELLED)
        )
        assert cancelled.value.status == "cancelled"

        result = await use_cases().delete_invoice().execute(invoice_id)

        assert result.error.code == "CANNOT_DELETE"

    async def test_draft_deleted_with_items(self, use_cases, db_session: AsyncSession):
        created = await use_cases().create_invoice().execute(create_command())
        invoice_id = created.value.invoice_id

        result = await use_cases().delete_invoice().execute(invoice_id)

        assert result.value.deleted is True
        assert await db_session.get(Invoice, invoice_id) is None
        items = (await db_session.exec(select(InvoiceItem).where(InvoiceItem.invoice_id == invoice_id))).all()
        assert items == []

    async def test_manual_paid_rejected(self, use_cases):
        invoice_id = await create_sent_invoice(use_cases)

        result = await use_cases().update_invoice_status().execute(
            UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, status=InvoiceStatus.PAID)
        )

        assert result.error.code == "INVALID_STATUS_TRANSITION"


@pytest.mark.asyncio
class TestOverdueSweepIntegration:

    async def test_sweep_is_idempotent(self, use_cases, db_session: AsyncSession):
        past_due = await create_sent_invoice(use_cases, due_date=date(2024, 4, 9))
        due_today = await create_sent_invoice(use_cases, due_date=date(2024, 4, 10))

        first = await use_cases(None).sweep_overdue_invoices().execute_all()
        second = await use_cases(None).sweep_overdue_invoices().execute_all()

        assert first.value.transitioned_invoice_ids == [past_due]
        assert second.value.invoices_transitioned == 0
        assert (await db_session.get(Invoice, past_due)).status == InvoiceStatus.OVERDUE
        assert (await db_session.get(Invoice, due_today)).status == InvoiceStatus.SENT

        status_changes = (await db_session.exec(
            select(AuditLog)
            .where(AuditLog.entity_id == past_due)
            .where(AuditLog.action == AuditAction.STATUS_CHANGE)
        )).all()
        by_status = {entry.new_data["status"]: entry for entry in status_changes}
        assert sorted(by_status) == ["overdue", "sent"]
        assert by_status["overdue"].new_data["trigger"] == "overdue_sweep"
        assert by_status["overdue"].actor_id is None

    async def test_overdue_invoice_can_still_be_paid(self, use_cases):
        invoice_id = await create_sent_invoice(use_cases)
        await use_cases(None).sweep_overdue_invoices().execute_all()

        result = await use_cases().create_payment().execute(payment_command(invoice_id, "118.00"))

        assert result.value.invoice_status == "paid"
