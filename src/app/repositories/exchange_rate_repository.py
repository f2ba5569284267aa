"""Exchange Rate Repository Interface

Defines the contract for exchange rate history persistence.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from src.domain.exchange_rate import ExchangeRate


class ExchangeRateRepository(ABC):
    """
    Repository interface for ExchangeRate persistence

    Rates form an append-only history per currency pair; the current rate
    is the row with the latest effective_date.
    """

    @abstractmethod
    async def get_latest(
        self, organization_id: str, from_currency: str, to_currency: str
    ) -> Optional[ExchangeRate]:
        """
        Retrieve the current rate for a currency pair

        Args:
            organization_id: Organization identifier
            from_currency: Source currency
            to_currency: Target (base) currency

        Returns:
            ExchangeRate with the latest effective_date, None if no rate exists
        """
        pass

    @abstractmethod
    async def get_for_day(
        self,
        organization_id: str,
        from_currency: str,
        to_currency: str,
        effective_date: date,
    ) -> Optional[ExchangeRate]:
        """
        Retrieve the rate row for an exact day, if any
        """
        pass

    @abstractmethod
    async def list_current(self, organization_id: str, to_currency: str) -> List[ExchangeRate]:
        """
        Retrieve the current rate for every source currency

        Returns:
            One ExchangeRate per from_currency, ordered by from_currency
        """
        pass

    @abstractmethod
    async def get_by_id(self, exchange_rate_id: str) -> Optional[ExchangeRate]:
        pass

    @abstractmethod
    async def create(self, exchange_rate: ExchangeRate) -> ExchangeRate:
        pass

    @abstractmethod
    async def update(self, exchange_rate: ExchangeRate) -> ExchangeRate:
        pass

    @abstractmethod
    async def delete(self, exchange_rate: ExchangeRate) -> None:
        pass
