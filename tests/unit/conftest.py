import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.services.access_verifier import AccessVerifier, OrganizationAccess
from src.app.services.audit_service import AuditService
from src.domain.organization_member import MemberRole
from tests.fixtures.clock import FixedClock
from tests.fixtures.factories import ORG_ID, USER_ID


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def clock():
    """Clock frozen at 2024-04-10 12:00 UTC"""
    return FixedClock.on(date(2024, 4, 10))


@pytest.fixture
def access_verifier():
    """Access verifier granting every permission to USER_ID"""
    verifier = MagicMock(spec=AccessVerifier)
    verifier.verify_access = AsyncMock(
        return_value=OrganizationAccess(
            organization_id=ORG_ID, user_id=USER_ID, role=MemberRole.ADMIN
        )
    )
    return verifier


@pytest.fixture
def mock_audit():
    """Audit service that records nothing"""
    audit = MagicMock(spec=AuditService)
    audit.record = AsyncMock()
    audit.record_status_change = AsyncMock()
    return audit


@pytest.fixture
def mock_invoice_repo():
    """Invoice repository whose update returns the entity it was given"""
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo
