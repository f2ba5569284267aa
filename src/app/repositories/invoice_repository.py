"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional
from src.domain.invoice import Invoice, InvoiceStatus


@dataclass(frozen=True)
class InvoiceFilters:
    """Optional narrowing applied to listings and reports"""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    customer_id: Optional[str] = None
    status: Optional[InvoiceStatus] = None


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for the invoice engine and reports.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row (SELECT FOR UPDATE) for the
                rest of the transaction

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_organization(
        self,
        organization_id: str,
        filters: Optional[InvoiceFilters] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve invoices of an organization, newest first
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def list_overdue_candidates(
        self, today: date, organization_id: Optional[str] = None
    ) -> List[Invoice]:
        """
        Retrieve sent invoices whose due date is before today

        Args:
            today: Current date (time of day already stripped)
            organization_id: Restrict to one organization, or None for all

        Returns:
            List of invoices with status SENT and due_date < today
        """
        pass

    @abstractmethod
    async def count_by_status(
        self, organization_id: str, filters: Optional[InvoiceFilters] = None
    ) -> Dict[InvoiceStatus, int]:
        """
        Count invoices per status

        Returns:
            Mapping of status to count; statuses without invoices may be absent
        """
        pass

    @abstractmethod
    async def list_for_reporting(
        self,
        organization_id: str,
        statuses: Iterable[InvoiceStatus],
        filters: Optional[InvoiceFilters] = None,
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> List[Invoice]:
        """
        Retrieve invoices in the given statuses for aggregation

        Args:
            organization_id: Organization identifier
            statuses: Statuses to include
            filters: Optional user filters
            issued_from: Inclusive lower bound on issue_date
            issued_to: Inclusive upper bound on issue_date

        Returns:
            Matching invoices
        """
        pass
