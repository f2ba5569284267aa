"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Dict, Iterable, List, Optional
from datetime import date
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository, InvoiceFilters
from src.domain.invoice import Invoice, InvoiceStatus


def _apply_filters(statement, filters: Optional[InvoiceFilters]):
    if filters is None:
        return statement
    if filters.date_from:
        statement = statement.where(Invoice.issue_date >= filters.date_from)
    if filters.date_to:
        statement = statement.where(Invoice.issue_date <= filters.date_to)
    if filters.customer_id:
        statement = statement.where(Invoice.customer_id == filters.customer_id)
    if filters.status:
        statement = statement.where(Invoice.status == filters.status)
    return statement


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE, keyed by invoice id
    - Locked reads refresh the identity map so status checks see committed state
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_organization(
        self,
        organization_id: str,
        filters: Optional[InvoiceFilters] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        statement = select(Invoice).where(Invoice.organization_id == organization_id)
        statement = _apply_filters(statement, filters)
        statement = statement.order_by(Invoice.issue_date.desc(), Invoice.created_at.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def list_overdue_candidates(
        self, today: date, organization_id: Optional[str] = None
    ) -> List[Invoice]:
        """
        Retrieve sent invoices due strictly before today

        Args:
            today: Current date
            organization_id: Restrict to one organization, or None for all

        Returns:
            Invoices ordered by due date, oldest first
        """
        statement = (
            select(Invoice)
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date < today)
        )

        if organization_id:
            statement = statement.where(Invoice.organization_id == organization_id)

        statement = statement.order_by(Invoice.due_date.asc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_status(
        self, organization_id: str, filters: Optional[InvoiceFilters] = None
    ) -> Dict[InvoiceStatus, int]:
        statement = (
            select(Invoice.status, func.count())
            .select_from(Invoice)
            .where(Invoice.organization_id == organization_id)
        )
        statement = _apply_filters(statement, filters)
        statement = statement.group_by(Invoice.status)

        result = await self.session.execute(statement)
        return {InvoiceStatus(status): count for status, count in result.all()}

    async def list_for_reporting(
        self,
        organization_id: str,
        statuses: Iterable[InvoiceStatus],
        filters: Optional[InvoiceFilters] = None,
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.organization_id == organization_id)
            .where(Invoice.status.in_(list(statuses)))
        )
        statement = _apply_filters(statement, filters)

        if issued_from:
            statement = statement.where(Invoice.issue_date >= issued_from)
        if issued_to:
            statement = statement.where(Invoice.issue_date <= issued_to)

        result = await self.session.execute(statement)
        return list(result.scalars().all())
