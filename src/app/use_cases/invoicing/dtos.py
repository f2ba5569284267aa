"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice, InvoiceStatus, DiscountType
from src.domain.invoice_item import InvoiceItem
from src.app.use_cases.payments.dtos import PaymentSummaryDTO


class InvoiceItemInputDTO(BaseModel):
    """Line item as submitted; range checks happen in the totals calculator"""

    description: str = Field(..., description="Item description (1-500 chars)")
    quantity: Decimal = Field(..., description="Quantity (> 0, <= 999,999)")
    unit_price: Decimal = Field(..., description="Price per unit (>= 0)")


class InvoiceCommandFields(BaseModel):
    """Fields shared by create and update commands"""

    customer_id: str = Field(..., description="Billed customer (must belong to the organization)")

    currency: str = Field(..., min_length=3, max_length=3, description="Invoice currency (ISO 4217)")

    issue_date: date = Field(..., description="Issue date")

    due_date: date = Field(..., description="Due date")

    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax rate in percent (0-100)")

    discount_type: Optional[DiscountType] = Field(default=None, description="percentage, fixed or none")

    discount_value: Optional[Decimal] = Field(default=None, description="Discount percentage or amount")

    notes: Optional[str] = Field(default=None, max_length=1000)

    items: List[InvoiceItemInputDTO] = Field(default_factory=list)


class CreateInvoiceCommandDTO(InvoiceCommandFields):
    """
    Command DTO for creating a draft invoice

    Used as input to CreateInvoice use case.
    """

    organization_id: str = Field(..., description="Organization identifier")

    class Config:
        json_schema_extra = {
            "example": {
                "organization_id": "org_acme",
                "customer_id": "cus_123",
                "currency": "EUR",
                "issue_date": "2024-03-01",
                "due_date": "2024-03-31",
                "tax_rate": "18",
                "discount_type": None,
                "discount_value": None,
                "items": [{"description": "Consulting", "quantity": "2", "unit_price": "50.00"}],
            }
        }


class UpdateInvoiceCommandDTO(InvoiceCommandFields):
    """
    Command DTO for editing a draft invoice

    Items are replaced wholesale; totals and the currency snapshot are recomputed.
    """

    invoice_id: str = Field(..., description="Invoice to edit")


class UpdateInvoiceStatusCommandDTO(BaseModel):
    invoice_id: str
    status: InvoiceStatus


class InvoiceItemDTO(BaseModel):
    id: str
    position: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    total: Decimal

    @classmethod
    def from_entity(cls, item: InvoiceItem) -> "InvoiceItemDTO":
        return cls(
            id=item.id,
            position=item.position,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total=item.total,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, UpdateInvoice, UpdateInvoiceStatus, SendInvoice, etc.
    """

    invoice_id: str = Field(..., description="Invoice ID")
    organization_id: str
    customer_id: str
    invoice_number: str = Field(..., description="INV-YYYY-NNNN")
    currency: str
    issue_date: date
    due_date: date
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Decimal] = None
    discount_amount: Decimal
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    exchange_rate_to_base: Optional[Decimal] = Field(
        default=None, description="Frozen rate, null when no rate was on file"
    )
    total_in_base_currency: Optional[Decimal] = None
    status: str = Field(..., description="Invoice status")
    notes: Optional[str] = None
    items: List[InvoiceItemDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, invoice: Invoice, items: Optional[List[InvoiceItem]] = None
    ) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            organization_id=invoice.organization_id,
            customer_id=invoice.customer_id,
            invoice_number=invoice.invoice_number,
            currency=invoice.currency,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            discount_type=invoice.discount_type,
            discount_value=invoice.discount_value,
            discount_amount=invoice.discount_amount,
            tax_rate=invoice.tax_rate,
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount,
            total=invoice.total,
            exchange_rate_to_base=invoice.exchange_rate_to_base,
            total_in_base_currency=invoice.total_in_base_currency,
            status=invoice.status.value,
            notes=invoice.notes,
            items=[InvoiceItemDTO.from_entity(i) for i in (items or [])],
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceListResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    limit: int
    offset: int


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: str
    invoice_number: str
    deleted: bool = True


class SweepResultDTO(BaseModel):
    """
    Result of an overdue sweep run

    A second run without intervening changes reports zero transitions.
    """

    organization_id: Optional[str] = Field(
        default=None, description="Scoped organization, null for the global sweep"
    )
    sweep_date: date = Field(..., description="Invoices due before this date were considered")
    candidates_found: int
    invoices_transitioned: int
    failed_transitions: int
    transitioned_invoice_ids: List[str] = Field(default_factory=list)
    execution_time_ms: int


class InvoiceDetailResponseDTO(BaseModel):
    """Invoice with its items and payment totals"""

    invoice: InvoiceResponseDTO
    payment_summary: PaymentSummaryDTO
