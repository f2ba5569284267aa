import pytest
import pytest_asyncio
from datetime import date
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from src.adapter.database import build_engine, build_session_factory
from src.adapter.wiring import UseCaseFactory
from src.depends import get_session
from src.domain.customer import Customer
from src.domain.organization import Organization
from src.domain.organization_member import MemberRole, OrganizationMember
from tests.fixtures.clock import FixedClock
from tests.fixtures.factories import (
    CUSTOMER_ID,
    MEMBER_USER_ID,
    ORG_ID,
    OTHER_CUSTOMER_ID,
    OTHER_ORG_ID,
    USER_ID,
)


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine shared by every session of a test"""
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test, seeded with two organizations"""
    Session = build_session_factory(engine)
    async with Session() as session:
        session.add_all([
            Organization(id=ORG_ID, name="Acme", base_currency="USD"),
            Organization(id=OTHER_ORG_ID, name="Initech", base_currency="EUR"),
        ])
        await session.flush()
        session.add_all([
            OrganizationMember(organization_id=ORG_ID, user_id=USER_ID, role=MemberRole.ADMIN),
            OrganizationMember(organization_id=ORG_ID, user_id=MEMBER_USER_ID, role=MemberRole.MEMBER),
            Customer(id=CUSTOMER_ID, organization_id=ORG_ID, name="Globex", email="ap@globex.test"),
            Customer(id=OTHER_CUSTOMER_ID, organization_id=OTHER_ORG_ID, name="Hooli"),
        ])
        await session.commit()
        yield session


@pytest.fixture
def clock():
    """Clock frozen at 2024-04-10 12:00 UTC"""
    return FixedClock.on(date(2024, 4, 10))


@pytest.fixture
def use_cases(db_session, clock):
    """Build a UseCaseFactory acting as the given user (admin by default)"""

    def build(user_id=USER_ID) -> UseCaseFactory:
        return UseCaseFactory(db_session, user_id=user_id, clock=clock)

    return build


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override, acting as the admin"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=f"http://test{ApplicationConfig.API_PREFIX}",
        headers={"X-User-Id": USER_ID},
    ) as ac:
        yield ac
