"""Organization use cases"""
from .update_organization_base_currency import UpdateOrganizationBaseCurrency
from .dtos import UpdateBaseCurrencyCommandDTO, OrganizationResponseDTO

__all__ = [
    "UpdateOrganizationBaseCurrency",
    "UpdateBaseCurrencyCommandDTO",
    "OrganizationResponseDTO",
]
