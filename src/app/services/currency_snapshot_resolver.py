"""Currency Snapshot Resolver

Freezes the conversion rate and base-currency total onto an invoice at
write time. Called fresh on every create and every draft edit; a rate
entered later never changes an already frozen invoice.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from src.app.repositories.exchange_rate_repository import ExchangeRateRepository
from src.app.repositories.organization_repository import OrganizationRepository
from src.domain.money import round2, round6

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrencySnapshot:
    exchange_rate_to_base: Optional[Decimal]
    total_in_base_currency: Optional[Decimal]

    @property
    def is_missing(self) -> bool:
        return self.exchange_rate_to_base is None


MISSING_SNAPSHOT = CurrencySnapshot(exchange_rate_to_base=None, total_in_base_currency=None)


class CurrencySnapshotResolver:
    """
    Resolves (rate, total_in_base) for an invoice currency

    Rules:
    1. Invoice currency equals base currency: (1, total), no rate lookup
    2. Latest rate on file: (round6(rate), round2(total * rate))
    3. No rate on file: (None, None), a valid permanent state
    4. Lookup failure: degrades to (None, None) instead of failing the write
    """

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        exchange_rate_repo: ExchangeRateRepository,
    ):
        self.organization_repo = organization_repo
        self.exchange_rate_repo = exchange_rate_repo

    async def execute(
        self, organization_id: str, invoice_currency: str, total: Decimal
    ) -> CurrencySnapshot:
        try:
            organization = await self.organization_repo.get_by_id(organization_id)
            if organization is None:
                return MISSING_SNAPSHOT

            base_currency = organization.base_currency
            if invoice_currency == base_currency:
                return CurrencySnapshot(
                    exchange_rate_to_base=Decimal("1"),
                    total_in_base_currency=total,
                )

            latest = await self.exchange_rate_repo.get_latest(
                organization_id, invoice_currency, base_currency
            )
            if latest is None:
                logger.info(
                    f"No exchange rate {invoice_currency}->{base_currency} on file for "
                    f"organization {organization_id}; snapshot left empty"
                )
                return MISSING_SNAPSHOT

            rate = round6(latest.rate)
            return CurrencySnapshot(
                exchange_rate_to_base=rate,
                total_in_base_currency=round2(total * rate),
            )

        except Exception as e:
            logger.error(
                f"Failed to resolve exchange rate snapshot for organization "
                f"{organization_id}, currency {invoice_currency}: {e}"
            )
            return MISSING_SNAPSHOT
