"""Use case assembly

Builds use cases on top of one AsyncSession, sharing the unit of work,
clock, audit recorder and state machine between them.
"""

from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyAuditLogRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyExchangeRateRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceSequenceRepository,
    SqlAlchemyOrganizationMemberRepository,
    SqlAlchemyOrganizationRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.access_verifier import MembershipAccessVerifier
from src.adapter.services.clock import SystemClock
from src.adapter.services.invoice_delivery_service import create_invoice_delivery_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_service import AuditService
from src.app.services.clock import Clock
from src.app.services.currency_snapshot_resolver import CurrencySnapshotResolver
from src.app.services.invoice_delivery_service import InvoiceDeliveryService
from src.app.services.invoice_state_machine import InvoiceStateMachine
from src.app.use_cases.exchange_rates import DeleteExchangeRate, ListExchangeRates, UpsertExchangeRate
from src.app.use_cases.invoicing import (
    CreateInvoice,
    DeleteInvoice,
    GetInvoice,
    ListInvoices,
    SendInvoice,
    SweepOverdueInvoices,
    UpdateInvoice,
    UpdateInvoiceStatus,
)
from src.app.use_cases.organizations import UpdateOrganizationBaseCurrency
from src.app.use_cases.payments import CreatePayment, DeletePayment, GetPaymentSummary, ListInvoicePayments
from src.app.use_cases.reporting import GetInvoiceStats, GetRevenueStats


class UseCaseFactory:
    """
    Per-session use case builder

    The acting user is bound here, in the access verifier; use cases take
    no user argument and record access.user_id as the audit actor.

    Args:
        session: Session shared by every repository
        user_id: Acting user, None for scheduled jobs
        clock: Time source, system UTC clock by default
        delivery_service: Channel for sent invoices, logging by default
    """

    def __init__(
        self,
        session: AsyncSession,
        user_id: Optional[str] = None,
        clock: Optional[Clock] = None,
        delivery_service: Optional[InvoiceDeliveryService] = None,
    ):
        self.session = session
        self.user_id = user_id
        self.clock = clock or SystemClock()
        self.delivery_service = delivery_service or create_invoice_delivery_service()

        self.uow = SqlAlchemyUnitOfWork(session)
        self.organization_repo = SqlAlchemyOrganizationRepository(session)
        self.customer_repo = SqlAlchemyCustomerRepository(session)
        self.exchange_rate_repo = SqlAlchemyExchangeRateRepository(session)
        self.invoice_repo = SqlAlchemyInvoiceRepository(session)
        self.invoice_item_repo = SqlAlchemyInvoiceItemRepository(session)
        self.sequence_repo = SqlAlchemyInvoiceSequenceRepository(session)
        self.payment_repo = SqlAlchemyPaymentRepository(session)

        self.access_verifier = MembershipAccessVerifier(
            SqlAlchemyOrganizationMemberRepository(session), user_id
        )
        self.audit = AuditService(SqlAlchemyAuditLogRepository(session), self.clock)
        self.state_machine = InvoiceStateMachine(self.invoice_repo, self.audit, self.clock)
        self.snapshot_resolver = CurrencySnapshotResolver(
            self.organization_repo, self.exchange_rate_repo
        )

    # Invoicing

    def create_invoice(self) -> CreateInvoice:
        return CreateInvoice(
            self.uow,
            self.organization_repo,
            self.customer_repo,
            self.invoice_repo,
            self.invoice_item_repo,
            self.sequence_repo,
            self.snapshot_resolver,
            self.access_verifier,
            self.audit,
            self.clock,
        )

    def update_invoice(self) -> UpdateInvoice:
        return UpdateInvoice(
            self.uow,
            self.customer_repo,
            self.invoice_repo,
            self.invoice_item_repo,
            self.snapshot_resolver,
            self.access_verifier,
            self.audit,
            self.clock,
        )

    def update_invoice_status(self) -> UpdateInvoiceStatus:
        return UpdateInvoiceStatus(
            self.uow,
            self.invoice_repo,
            self.invoice_item_repo,
            self.state_machine,
            self.access_verifier,
        )

    def send_invoice(self) -> SendInvoice:
        return SendInvoice(
            self.uow,
            self.invoice_repo,
            self.invoice_item_repo,
            self.customer_repo,
            self.state_machine,
            self.delivery_service,
            self.access_verifier,
        )

    def delete_invoice(self) -> DeleteInvoice:
        return DeleteInvoice(
            self.uow,
            self.invoice_repo,
            self.invoice_item_repo,
            self.payment_repo,
            self.access_verifier,
            self.audit,
        )

    def get_invoice(self) -> GetInvoice:
        return GetInvoice(
            self.invoice_repo, self.invoice_item_repo, self.payment_repo, self.access_verifier
        )

    def list_invoices(self) -> ListInvoices:
        return ListInvoices(self.invoice_repo, self.access_verifier)

    def sweep_overdue_invoices(self) -> SweepOverdueInvoices:
        return SweepOverdueInvoices(
            self.uow, self.invoice_repo, self.state_machine, self.access_verifier, self.clock
        )

    # Payments

    def create_payment(self) -> CreatePayment:
        return CreatePayment(
            self.uow,
            self.invoice_repo,
            self.payment_repo,
            self.state_machine,
            self.access_verifier,
            self.audit,
            self.clock,
        )

    def delete_payment(self) -> DeletePayment:
        return DeletePayment(
            self.uow,
            self.invoice_repo,
            self.payment_repo,
            self.state_machine,
            self.access_verifier,
            self.audit,
        )

    def get_payment_summary(self) -> GetPaymentSummary:
        return GetPaymentSummary(self.invoice_repo, self.payment_repo, self.access_verifier)

    def list_invoice_payments(self) -> ListInvoicePayments:
        return ListInvoicePayments(self.invoice_repo, self.payment_repo, self.access_verifier)

    # Exchange rates

    def upsert_exchange_rate(self) -> UpsertExchangeRate:
        return UpsertExchangeRate(
            self.uow,
            self.organization_repo,
            self.exchange_rate_repo,
            self.access_verifier,
            self.audit,
            self.clock,
        )

    def list_exchange_rates(self) -> ListExchangeRates:
        return ListExchangeRates(self.organization_repo, self.exchange_rate_repo, self.access_verifier)

    def delete_exchange_rate(self) -> DeleteExchangeRate:
        return DeleteExchangeRate(self.uow, self.exchange_rate_repo, self.access_verifier, self.audit)

    # Reporting

    def get_invoice_stats(self) -> GetInvoiceStats:
        return GetInvoiceStats(self.organization_repo, self.invoice_repo, self.access_verifier)

    def get_revenue_stats(self) -> GetRevenueStats:
        return GetRevenueStats(
            self.organization_repo, self.invoice_repo, self.access_verifier, self.clock
        )

    # Organizations

    def update_organization_base_currency(self) -> UpdateOrganizationBaseCurrency:
        return UpdateOrganizationBaseCurrency(
            self.uow, self.organization_repo, self.access_verifier, self.audit, self.clock
        )
