"""Audit Log Repository Interface"""

from abc import ABC, abstractmethod
from src.domain.audit_log import AuditLog


class AuditLogRepository(ABC):

    @abstractmethod
    async def add(self, entry: AuditLog) -> None:
        """
        Persist an audit entry within the current transaction

        Implementations must isolate the write so that its failure cannot
        invalidate the surrounding transaction.
        """
        pass
