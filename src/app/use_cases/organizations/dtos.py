"""Data Transfer Objects for Organization Use Cases"""

from datetime import datetime
from pydantic import BaseModel, Field
from src.domain.organization import Organization


class UpdateBaseCurrencyCommandDTO(BaseModel):
    """
    Command DTO for changing an organization's base currency

    Invoices already written keep the snapshot they were frozen with.
    """

    organization_id: str = Field(..., description="Organization identifier")

    base_currency: str = Field(..., min_length=3, max_length=3, description="New base currency (ISO 4217)")

    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": "org_acme",
                "base_currency": "EUR",
            }
        }


class OrganizationResponseDTO(BaseModel):
    organization_id: str
    name: str
    base_currency: str
    updated_at: datetime

    @classmethod
    def from_entity(cls, organization: Organization) -> "OrganizationResponseDTO":
        return cls(
            organization_id=organization.id,
            name=organization.name,
            base_currency=organization.base_currency,
            updated_at=organization.updated_at,
        )
