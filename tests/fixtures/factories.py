"""Entity builders for tests"""

from datetime import date, datetime
from decimal import Decimal
from src.domain.exchange_rate import ExchangeRate
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.organization import Organization
from src.domain.payment import Payment, PaymentMethod

ORG_ID = "org_acme"
USER_ID = "user_admin"
CUSTOMER_ID = "cus_123"
MEMBER_USER_ID = "user_member"
OTHER_ORG_ID = "org_other"
OTHER_CUSTOMER_ID = "cus_other"


def make_organization(**overrides) -> Organization:
    fields = dict(id=ORG_ID, name="Acme", base_currency="USD")
    fields.update(overrides)
    return Organization(**fields)


def make_invoice(**overrides) -> Invoice:
    fields = dict(
        id="inv_1",
        organization_id=ORG_ID,
        customer_id=CUSTOMER_ID,
        invoice_number="INV-2024-0001",
        currency="USD",
        issue_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        discount_amount=Decimal("0.00"),
        tax_rate=Decimal("18.00"),
        subtotal=Decimal("100.00"),
        tax_amount=Decimal("18.00"),
        total=Decimal("118.00"),
        exchange_rate_to_base=Decimal("1"),
        total_in_base_currency=Decimal("118.00"),
        status=InvoiceStatus.DRAFT,
        created_at=datetime(2024, 3, 1, 9, 0),
        updated_at=datetime(2024, 3, 1, 9, 0),
    )
    fields.update(overrides)
    return Invoice(**fields)


def make_payment(**overrides) -> Payment:
    fields = dict(
        id="pay_1",
        invoice_id="inv_1",
        organization_id=ORG_ID,
        amount=Decimal("118.00"),
        payment_date=date(2024, 3, 15),
        method=PaymentMethod.BANK_TRANSFER,
        created_at=datetime(2024, 3, 15, 10, 0),
    )
    fields.update(overrides)
    return Payment(**fields)


def make_exchange_rate(**overrides) -> ExchangeRate:
    fields = dict(
        id="rate_1",
        organization_id=ORG_ID,
        from_currency="EUR",
        to_currency="USD",
        rate=Decimal("1.085000"),
        effective_date=date(2024, 3, 1),
        created_at=datetime(2024, 3, 1, 8, 0),
        updated_at=datetime(2024, 3, 1, 8, 0),
    )
    fields.update(overrides)
    return ExchangeRate(**fields)
