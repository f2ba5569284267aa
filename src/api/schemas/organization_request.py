"""Request schemas for Organization API"""

from pydantic import BaseModel, Field, field_validator


class OrganizationSettingsRequestSchema(BaseModel):
    """
    Request schema for organization settings

    Used for PATCH /organizations/{organization_id} endpoint.
    """

    base_currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code")

    @field_validator("base_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if not v.isalpha():
            raise ValueError("base_currency must be a 3-letter code")
        return v.upper()
