"""Unit tests for CurrencySnapshotResolver"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.currency_snapshot_resolver import CurrencySnapshotResolver
from tests.fixtures.factories import ORG_ID, make_exchange_rate, make_organization


@pytest.fixture
def organization_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_organization(base_currency="USD"))
    return repo


@pytest.fixture
def exchange_rate_repo():
    return MagicMock()


@pytest.fixture
def resolver(organization_repo, exchange_rate_repo):
    return CurrencySnapshotResolver(organization_repo, exchange_rate_repo)


@pytest.mark.asyncio
class TestCurrencySnapshotResolver:

    async def test_base_currency_is_identity(self, resolver, exchange_rate_repo):
        """
        Given: Invoice currency equals the organization base currency
        When: The snapshot is resolved
        Then: Rate is 1 and total_in_base equals total, no rate lookup
        """
        exchange_rate_repo.get_latest = AsyncMock()

        snapshot = await resolver.execute(ORG_ID, "USD", Decimal("118.00"))

        assert snapshot.exchange_rate_to_base == Decimal("1")
        assert snapshot.total_in_base_currency == Decimal("118.00")
        assert not snapshot.is_missing
        exchange_rate_repo.get_latest.assert_not_called()

    async def test_latest_rate_applied(self, resolver, exchange_rate_repo):
        exchange_rate_repo.get_latest = AsyncMock(
            return_value=make_exchange_rate(rate=Decimal("1.0850004"))
        )

        snapshot = await resolver.execute(ORG_ID, "EUR", Decimal("106.20"))

        assert snapshot.exchange_rate_to_base == Decimal("1.085000")
        # 106.20 * 1.085 = 115.227
        assert snapshot.total_in_base_currency == Decimal("115.23")
        exchange_rate_repo.get_latest.assert_called_once_with(ORG_ID, "EUR", "USD")

    async def test_no_rate_on_file_is_missing(self, resolver, exchange_rate_repo):
        exchange_rate_repo.get_latest = AsyncMock(return_value=None)

        snapshot = await resolver.execute(ORG_ID, "EUR", Decimal("100.00"))

        assert snapshot.is_missing
        assert snapshot.exchange_rate_to_base is None
        assert snapshot.total_in_base_currency is None

    async def test_lookup_failure_degrades_to_missing(self, resolver, exchange_rate_repo):
        exchange_rate_repo.get_latest = AsyncMock(side_effect=RuntimeError("connection reset"))

        snapshot = await resolver.execute(ORG_ID, "EUR", Decimal("100.00"))

        assert snapshot.is_missing

    async def test_unknown_organization_is_missing(self, resolver, organization_repo):
        organization_repo.get_by_id = AsyncMock(return_value=None)

        snapshot = await resolver.execute("org_missing", "USD", Decimal("100.00"))

        assert snapshot.is_missing
