"""SQLAlchemy Invoice Item Repository Implementation"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice_item import InvoiceItem


class SqlAlchemyInvoiceItemRepository(InvoiceItemRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceItem]:
        statement = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .order_by(InvoiceItem.position.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def replace_for_invoice(self, invoice_id: str, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Delete all items of the invoice and insert the given ones

        Args:
            invoice_id: Owning invoice
            items: New items in display order

        Returns:
            Persisted items
        """
        await self.delete_by_invoice_id(invoice_id)
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def delete_by_invoice_id(self, invoice_id: str) -> None:
        await self.session.execute(
            delete(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
