"""Exchange rate use cases"""
from .upsert_exchange_rate import UpsertExchangeRate
from .list_exchange_rates import ListExchangeRates
from .delete_exchange_rate import DeleteExchangeRate
from .dtos import (
    UpsertExchangeRateCommandDTO,
    ExchangeRateResponseDTO,
    ExchangeRateListResponseDTO,
    DeleteExchangeRateResponseDTO,
)

__all__ = [
    "UpsertExchangeRate",
    "ListExchangeRates",
    "DeleteExchangeRate",
    "UpsertExchangeRateCommandDTO",
    "ExchangeRateResponseDTO",
    "ExchangeRateListResponseDTO",
    "DeleteExchangeRateResponseDTO",
]
