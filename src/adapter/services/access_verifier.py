"""Membership-based Access Verifier

Resolves the acting user's role in the organization and checks it against
the role permission table.
"""

import logging
from src.app.errors import ErrorCode
from src.app.repositories.organization_member_repository import OrganizationMemberRepository
from src.app.services.access_verifier import AccessVerifier, AccessDeniedError, OrganizationAccess
from src.domain.organization_member import Permission

logger = logging.getLogger(__name__)


class MembershipAccessVerifier(AccessVerifier):

    def __init__(self, member_repo: OrganizationMemberRepository, user_id: str):
        self.member_repo = member_repo
        self.user_id = user_id

    async def verify_access(self, organization_id: str, permission: Permission) -> OrganizationAccess:
        if not self.user_id:
            raise AccessDeniedError(ErrorCode.UNAUTHORIZED, "Authentication required")

        membership = await self.member_repo.get_membership(organization_id, self.user_id)
        if membership is None:
            logger.info(f"User {self.user_id} is not a member of organization {organization_id}")
            raise AccessDeniedError(
                ErrorCode.UNAUTHORIZED,
                "You do not have access to this organization",
            )

        if not membership.has_permission(permission):
            logger.info(
                f"User {self.user_id} ({membership.role.value}) lacks {permission.value} "
                f"on organization {organization_id}"
            )
            raise AccessDeniedError(
                ErrorCode.FORBIDDEN,
                f"Your role does not allow {permission.value} in this organization",
            )

        return OrganizationAccess(
            organization_id=organization_id,
            user_id=self.user_id,
            role=membership.role,
        )
