"""SQLAlchemy Audit Log Repository Implementation"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.audit_log_repository import AuditLogRepository
from src.domain.audit_log import AuditLog


class SqlAlchemyAuditLogRepository(AuditLogRepository):
    """
    Writes audit entries inside a SAVEPOINT

    A failed insert rolls back only the savepoint; the caller's transaction
    stays usable and commits the primary change.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, entry: AuditLog) -> None:
        async with self.session.begin_nested():
            self.session.add(entry)
            await self.session.flush()
