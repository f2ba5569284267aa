"""Access Verifier Interface

Permission check consumed at the entry of every operation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from libs.result import Result, Return, Error
from src.domain.organization_member import MemberRole, Permission


@dataclass(frozen=True)
class OrganizationAccess:
    organization_id: str
    user_id: str
    role: MemberRole


class AccessDeniedError(Exception):
    """Raised by verifiers when access is refused"""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class AccessVerifier(ABC):
    """
    Verifies that the current user may act on an organization

    Raises:
        AccessDeniedError: code UNAUTHORIZED when the user is not a member,
            FORBIDDEN when the member's role lacks the permission
    """

    @abstractmethod
    async def verify_access(
        self, organization_id: str, permission: Permission
    ) -> OrganizationAccess:
        pass


async def authorize(
    verifier: AccessVerifier, organization_id: str, permission: Permission
) -> Result[OrganizationAccess]:
    """Convert an access-check exception into a Result"""
    try:
        access = await verifier.verify_access(organization_id, permission)
    except AccessDeniedError as e:
        return Return.err(
            Error(
                code=e.code,
                message=e.message,
                reason=f"permission={permission.value}",
            )
        )
    return Return.ok(access)
