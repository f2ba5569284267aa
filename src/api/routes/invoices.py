"""Invoice API Routes

FastAPI routes for the invoice lifecycle: create, edit, send, status
changes, delete and the overdue sweep.
"""

from fastapi import APIRouter, Depends, Query, status

from src.adapter.wiring import UseCaseFactory
from src.api.error import raise_for_error
from src.api.schemas.invoice_request import (
    InvoiceRequestSchema,
    InvoiceStatusRequestSchema,
    invoice_filters,
)
from src.app.repositories.invoice_repository import InvoiceFilters
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    DeleteInvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    InvoiceItemInputDTO,
    InvoiceListResponseDTO,
    InvoiceResponseDTO,
    SweepResultDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.depends import get_use_cases

router = APIRouter(tags=["Invoices"])

ERROR_EXAMPLE = {
    "application/json": {
        "example": {
            "error": {
                "code": "CANNOT_EDIT",
                "message": "Invoice INV-2024-0001 can only be edited in draft status. Current status: sent",
            }
        }
    }
}


def _command_fields(request: InvoiceRequestSchema) -> dict:
    return dict(
        customer_id=request.customer_id,
        currency=request.currency,
        issue_date=request.issue_date,
        due_date=request.due_date,
        tax_rate=request.tax_rate,
        discount_type=request.discount_type,
        discount_value=request.discount_value,
        notes=request.notes,
        items=[
            InvoiceItemInputDTO(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in request.items
        ],
    )


@router.post(
    "/organizations/{organization_id}/invoices",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    organization_id: str,
    request: InvoiceRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Create a draft invoice.

    Totals are computed from the items; the invoice number is allocated as
    INV-YYYY-NNNN and the exchange rate to the organization base currency
    is frozen onto the invoice.

    **Returns:**
    - 201: Draft invoice created
    - 400: Validation failed (field errors in `details`)
    - 401/403: Not a member / role lacks create permission
    - 404: Organization or customer not found
    """
    command = CreateInvoiceCommandDTO(
        organization_id=organization_id,
        **_command_fields(request),
    )
    result = await use_cases.create_invoice().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{organization_id}/invoices",
    response_model=InvoiceListResponseDTO,
)
async def list_invoices(
    organization_id: str,
    filters: InvoiceFilters = Depends(invoice_filters),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.list_invoices().execute(
        organization_id, filters=filters, limit=limit, offset=offset
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/organizations/{organization_id}/invoices/sweep-overdue",
    response_model=SweepResultDTO,
)
async def sweep_overdue_invoices(
    organization_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Move this organization's sent invoices past their due date to overdue.

    Safe to call repeatedly; a second call transitions nothing.
    """
    result = await use_cases.sweep_overdue_invoices().execute_for_organization(organization_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/invoices/{invoice_id}", response_model=InvoiceDetailResponseDTO)
async def get_invoice(
    invoice_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.get_invoice().execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/invoices/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={409: {"description": "Invoice is not a draft", "content": ERROR_EXAMPLE}},
)
async def update_invoice(
    invoice_id: str,
    request: InvoiceRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Edit a draft invoice.

    Items are replaced, totals recomputed and the exchange rate resolved
    again from the current rate table.

    **Returns:**
    - 200: Invoice updated
    - 409: Invoice is no longer a draft (CANNOT_EDIT)
    """
    command = UpdateInvoiceCommandDTO(
        invoice_id=invoice_id,
        **_command_fields(request),
    )
    result = await use_cases.update_invoice().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/invoices/{invoice_id}/status", response_model=InvoiceResponseDTO)
async def update_invoice_status(
    invoice_id: str,
    request: InvoiceStatusRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Manually change the status: draft -> sent, or cancel.

    paid and overdue are set by payments and the overdue sweep; requesting
    them here returns 409 INVALID_STATUS_TRANSITION.
    """
    command = UpdateInvoiceStatusCommandDTO(
        invoice_id=invoice_id,
        status=request.status,
    )
    result = await use_cases.update_invoice_status().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/invoices/{invoice_id}/send", response_model=InvoiceResponseDTO)
async def send_invoice(
    invoice_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.send_invoice().execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/invoices/{invoice_id}", response_model=DeleteInvoiceResponseDTO)
async def delete_invoice(
    invoice_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Delete a draft or cancelled invoice without payments.

    **Returns:**
    - 200: Invoice deleted
    - 409: Wrong status or payments recorded (CANNOT_DELETE)
    """
    result = await use_cases.delete_invoice().execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
