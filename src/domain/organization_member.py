"""Organization Member Domain Entity

Links a user to an organization with a role used for permission checks.
"""

from datetime import datetime
from enum import Enum
from sqlmodel import Field, Index
from src.domain.base import BaseModel, generate_uuid


class MemberRole(str, Enum):
    """Membership roles"""
    ADMIN = "admin"
    MEMBER = "member"


class Permission(str, Enum):
    """Permissions checked at the entry of every operation"""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Admins hold every permission; members may read and create only
ROLE_PERMISSIONS = {
    MemberRole.ADMIN: frozenset(Permission),
    MemberRole.MEMBER: frozenset({Permission.READ, Permission.CREATE}),
}


class OrganizationMember(BaseModel, table=True):
    __tablename__ = "organization_members"
    __table_args__ = (
        Index("ix_organization_members_org_user", "organization_id", "user_id", unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id")
    user_id: str = Field(description="External user identifier")
    role: MemberRole = Field(default=MemberRole.MEMBER)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def has_permission(self, permission: Permission) -> bool:
        return permission in ROLE_PERMISSIONS.get(self.role, frozenset())
