"""Reporting use cases"""
from .get_invoice_stats import GetInvoiceStats
from .get_revenue_stats import GetRevenueStats
from .base_currency import resolve_base_amount
from .dtos import InvoiceStatsResponseDTO, RevenueBucketDTO, RevenueStatsResponseDTO

__all__ = [
    "GetInvoiceStats",
    "GetRevenueStats",
    "resolve_base_amount",
    "InvoiceStatsResponseDTO",
    "RevenueBucketDTO",
    "RevenueStatsResponseDTO",
]
